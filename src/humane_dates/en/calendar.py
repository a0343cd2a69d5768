"""Field-sensitive calendar arithmetic.

All helpers are pure functions over :class:`datetime.datetime` and keep
whatever ``tzinfo`` the input carries. Month and year changes go through
``relativedelta`` so day-of-month overflow clamps to the last valid day.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from dateutil.relativedelta import relativedelta

# ---------------------------------------------------------------------------
# Name tables
# ---------------------------------------------------------------------------

# Sunday-first, matching ``isoweekday() % 7``.
WEEKDAY_NAMES = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

UNIT_ALIASES: Dict[str, str] = {
    "second": "seconds",
    "seconds": "seconds",
    "sec": "seconds",
    "secs": "seconds",
    "minute": "minutes",
    "minutes": "minutes",
    "min": "minutes",
    "mins": "minutes",
    "hour": "hours",
    "hours": "hours",
    "hr": "hours",
    "hrs": "hours",
    "day": "days",
    "days": "days",
    "week": "weeks",
    "weeks": "weeks",
    "wk": "weeks",
    "wks": "weeks",
    "month": "months",
    "months": "months",
    "mo": "months",
    "mos": "months",
    "year": "years",
    "years": "years",
    "yr": "years",
    "yrs": "years",
}

# Fields a shift by each unit pins down, coarsest first.
UNIT_FIELDS: Dict[str, Tuple[str, ...]] = {
    "years": ("year",),
    "months": ("year", "month"),
    "weeks": ("year", "month", "day"),
    "days": ("year", "month", "day"),
    "hours": ("year", "month", "day", "hours"),
    "minutes": ("year", "month", "day", "hours", "minutes"),
    "seconds": ("year", "month", "day", "hours", "minutes", "seconds"),
}


def _normalize(word: str) -> str:
    return word.lower().rstrip(".")


def weekday_number(name: str) -> int:
    """Sunday-based index (0-6) of a weekday name or abbreviation."""
    prefix = _normalize(name)[:3]
    for index, weekday in enumerate(WEEKDAY_NAMES):
        if weekday.startswith(prefix):
            return index
    raise ValueError(f"Unknown weekday: {name!r}")


def month_number(name: str) -> int:
    """Calendar month number (1-12) of a month name or abbreviation."""
    prefix = _normalize(name)[:3]
    for index, month in enumerate(MONTH_NAMES, start=1):
        if month.startswith(prefix):
            return index
    raise ValueError(f"Unknown month: {name!r}")


def unit_name(word: str) -> str:
    """Canonical plural unit for any accepted spelling."""
    try:
        return UNIT_ALIASES[_normalize(word)]
    except KeyError:
        raise ValueError(f"Unknown unit: {word!r}") from None


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def weekday_of(value: datetime) -> int:
    """Sunday-based weekday index of ``value``."""
    return value.isoweekday() % 7


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def shift(value: datetime, unit: str, amount: int) -> datetime:
    """Move ``value`` by ``amount`` of ``unit`` (a canonical unit name)."""
    if unit not in UNIT_FIELDS:
        raise ValueError(f"Unknown unit: {unit!r}")
    return value + relativedelta(**{unit: amount})


def set_date(
    value: datetime,
    *,
    year: Optional[int] = None,
    month: Optional[int] = None,
    day: Optional[int] = None,
) -> datetime:
    """Replace date fields, clamping the day to the target month length."""
    # relativedelta treats a zero year as "unset"
    if year is not None and not 1 <= year <= 9999:
        raise ValueError(f"year {year} is out of range")
    return value + relativedelta(year=year, month=month, day=day)


def set_time(value: datetime, hour: int, minute: int = 0, second: int = 0) -> datetime:
    return value.replace(hour=hour, minute=minute, second=second, microsecond=0)


def to_24_hour(hour: int, meridiem: str) -> int:
    """Convert a 1-12 clock hour to 0-23 (``12am`` is midnight, ``12pm`` noon)."""
    afternoon = _normalize(meridiem).startswith("p")
    return hour % 12 + (12 if afternoon else 0)


def directional_weekday(value: datetime, target: int, offset: int) -> datetime:
    """Resolve ``last``/``this``/``next`` weekday phrases.

    Starts from the Sunday opening the week of ``value`` and moves
    ``offset`` weeks. A ``last`` target already behind us this week, or a
    ``next`` target still ahead of us, is taken from the current week, so
    the result is always the nearest such day in the requested direction.
    """
    current = weekday_of(value)
    if offset < 0 and target < current:
        offset += 1
    elif offset > 0 and target > current:
        offset -= 1
    return week_day(value, target, offset)


def week_day(value: datetime, target: int, offset: int = 0) -> datetime:
    """Day ``target`` of the week ``offset`` weeks from the week of ``value``."""
    sunday = value - timedelta(days=weekday_of(value))
    return sunday + timedelta(days=offset * 7 + target)


def upcoming_weekday(value: datetime, target: int) -> datetime:
    """Nearest ``target`` weekday on or after ``value``."""
    return value + timedelta(days=(target - weekday_of(value)) % 7)


def directional_year(
    value: datetime,
    month: int,
    day: Optional[int],
    offset: int,
) -> int:
    """Year for a ``last``/``this``/``next`` month phrase.

    ``last`` picks this year's candidate when it is already in the past,
    ``next`` when it is still ahead; otherwise the year moves by ``offset``.
    Comparison is by month, or by month and day when a day is given.
    """
    if day is None:
        candidate: Tuple[int, ...] = (month,)
        current: Tuple[int, ...] = (value.month,)
    else:
        candidate = (month, day)
        current = (value.month, value.day)

    if offset < 0 and candidate < current:
        offset += 1
    elif offset > 0 and candidate > current:
        offset -= 1
    return value.year + offset


def directional_clock_day(
    value: datetime,
    clock: Tuple[int, int, int],
    offset: int,
) -> datetime:
    """Day on which a ``last``/``next`` clock time falls, keeping the time of ``value``."""
    current = (value.hour, value.minute, value.second)
    if offset < 0 and clock < current:
        offset += 1
    elif offset > 0 and clock > current:
        offset -= 1
    return value + timedelta(days=offset)
