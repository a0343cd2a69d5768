"""Completion of partially specified dates.

Given a parse result, enumerate candidate values for the first field the
phrase left open and render each candidate as a phrase the grammar reads
back to the same timestamp (``on Jan 5 2024 at 3:30 pm``).
"""

from __future__ import annotations

from dataclasses import replace
from datetime import MAXYEAR, MINYEAR, datetime
from typing import List, Optional

from humane_dates.configuration.settings import SuggestionSettings
from humane_dates.en import calendar
from humane_dates.en.api import ExtractedDate
from humane_dates.en.extract import SpecifiedFields

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def render(value: datetime, specified: SpecifiedFields) -> str:
    """Phrase for ``value`` stating only the ``specified`` fields."""
    parts: List[str] = []

    if specified.month:
        parts.extend(["on", MONTH_ABBREVIATIONS[value.month - 1]])
        if specified.day:
            parts.append(str(value.day))
        if specified.year:
            parts.append(str(value.year))

    if specified.hours:
        minute = value.minute if specified.minutes else 0
        clock = f"{value.hour % 12 or 12}:{minute:02d}"
        if specified.seconds:
            clock += f":{value.second:02d}"
        parts.extend(["at", clock, "pm" if value.hour >= 12 else "am"])

    return " ".join(parts)


def complete_date(
    result: ExtractedDate,
    settings: Optional[SuggestionSettings] = None,
) -> List[str]:
    """Candidate phrases filling the first unspecified field of ``result``.

    Fields are considered in the order year (when a month is known), month
    (when a year is known), day (when a month is known), hours, minutes.
    A fully specified result yields its own phrase.
    """
    settings = settings or SuggestionSettings()
    value = result.date
    specified = replace(result.specified)
    candidates: List[datetime]

    if specified.month and not specified.year:
        first = max(MINYEAR, value.year - settings.year_range)
        stop = min(MAXYEAR + 1, value.year + settings.year_range)
        candidates = [calendar.set_date(value, year=year) for year in range(first, stop)]
        specified.mark("year")
    elif specified.year and not specified.month:
        candidates = [calendar.set_date(value, month=month) for month in range(1, 13)]
        specified.mark("month")
    elif specified.month and not specified.day:
        length = calendar.days_in_month(value.year, value.month)
        candidates = [value.replace(day=day) for day in range(1, length + 1)]
        specified.mark("day")
    elif not specified.hours:
        candidates = [value.replace(hour=hour) for hour in range(24)]
        specified.mark("hours")
    elif not specified.minutes:
        candidates = [
            value.replace(minute=minute)
            for minute in range(0, 60, settings.minutes_interval)
        ]
        specified.mark("minutes")
    else:
        candidates = [value]

    return [render(candidate, specified) for candidate in candidates]
