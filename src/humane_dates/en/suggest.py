"""Phrase suggestions for partially typed input.

:func:`suggest` works on the raw text alone: it recognizes the rough shape
of the input (word pairs, number and word, lone number or word), expands
matching vocabulary into whole phrases, and ranks them by edit distance.
:func:`suggest_for` prefers completing whatever already parses.
"""

from __future__ import annotations

import difflib
import logging
import re
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple, Union

from humane_dates.configuration.settings import Settings
from humane_dates.en.api import parse
from humane_dates.en.complete import complete_date

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
DAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
DIRECTIONAL = ("Next", "Last", "This")
IDENTIFIERS = ("in", "at", "on")
COMPLETE = ("Now",)
COMPLETE_DATE = ("Tomorrow", "Today", "Yesterday")
COMPLETE_TIME = ("Midnight", "Noon")
DATE_UNIT = ("days", "weeks", "months", "years")
DATE_UNIT_SINGULAR = ("day", "week", "month", "year")
TIME_UNIT = ("minutes", "seconds", "hours")

KEYWORDS = (
    MONTHS + DAYS + DIRECTIONAL + IDENTIFIERS + COMPLETE
    + COMPLETE_DATE + COMPLETE_TIME + DATE_UNIT + TIME_UNIT
)

# unit -> (step, maximum) for "In N unit" / "N unit ago" grids
DENOMS: Dict[str, Tuple[int, int]] = {
    "seconds": (5, 60),
    "minutes": (5, 60),
    "hours": (1, 6),
    "days": (1, 6),
    "weeks": (1, 3),
    "months": (1, 6),
    "years": (1, 5),
}

# Longest each month can be, so February offers the 29th.
MONTH_DAYS: Dict[str, int] = {
    "January": 31,
    "February": 29,
    "March": 31,
    "April": 30,
    "May": 31,
    "June": 30,
    "July": 31,
    "August": 31,
    "September": 30,
    "October": 31,
    "November": 30,
    "December": 31,
}

WORD_WORD = re.compile(r"([a-zA-Z]+)\s+([a-zA-Z]+)")
NUMBER_WORD = re.compile(r"([0-9]+)\s+[a-zA-Z]+")
WORD_NUMBER = re.compile(r"[a-zA-Z]+\s+([0-9]+)")
NUMBER_ONLY = re.compile(r"[0-9]+")
WORD_ONLY = re.compile(r"[a-zA-Z]+")


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def fuzzy_contains(needle: str, haystack: str) -> bool:
    """True if the characters of ``needle`` appear in order in ``haystack``."""
    remaining = iter(haystack.lower())
    return all(char in remaining for char in needle.lower())


def levenshtein(left: str, right: str) -> int:
    """Case-insensitive edit distance."""
    left, right = left.lower(), right.lower()
    if len(left) < len(right):
        left, right = right, left
    previous = list(range(len(right) + 1))
    for i, left_char in enumerate(left, start=1):
        current = [i]
        for j, right_char in enumerate(right, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (left_char != right_char),
                )
            )
        previous = current
    return previous[-1]


def measure(token: str, options: Iterable[str]) -> List[str]:
    """Options containing ``token`` as a subsequence, closest first."""
    matches = [option for option in options if fuzzy_contains(token, option)]

    def score(option: str) -> Tuple[int, float]:
        similarity = difflib.SequenceMatcher(None, token.lower(), option.lower()).ratio()
        return levenshtein(token, option), -similarity

    return sorted(matches, key=score)


def _unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


# ---------------------------------------------------------------------------
# Phrase expansion
# ---------------------------------------------------------------------------


def populate_by_value(value: str) -> List[str]:
    phrases: List[str] = []
    for month in MONTHS:
        phrases.append(f"{value} {month}")
        phrases.append(f"{month} {value}")
    for unit in DATE_UNIT + TIME_UNIT:
        phrases.append(f"In {value} {unit}")
        phrases.append(f"{value} {unit} ago")
    return phrases


def populate_by_directional(value: str) -> List[str]:
    return [f"{value} {word}" for word in COMPLETE_TIME + DATE_UNIT_SINGULAR + DAYS]


def populate_by_unit(unit: str) -> List[str]:
    step, maximum = DENOMS[unit]
    phrases: List[str] = []
    for amount in range(step, maximum + 1, step):
        phrases.append(f"In {amount} {unit}")
        phrases.append(f"{amount} {unit} ago")
    return phrases


def populate_by_month(month: str) -> List[str]:
    return [f"{month} {day}" for day in range(1, MONTH_DAYS[month] + 1)]


def populate_by_keyword(value: str) -> List[str]:
    phrases: List[str] = []
    for keyword in measure(value, KEYWORDS):
        if keyword in COMPLETE or keyword in COMPLETE_DATE or keyword in COMPLETE_TIME:
            phrases.append(keyword)
        elif keyword in DIRECTIONAL:
            phrases.extend(populate_by_directional(keyword))
        elif keyword in DATE_UNIT or keyword in TIME_UNIT:
            phrases.extend(populate_by_unit(keyword))
        elif keyword in MONTHS:
            phrases.extend(populate_by_month(keyword))
    return _unique(phrases)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def suggest(text: str, *, limit: Optional[int] = None) -> List[str]:
    """Ranked phrase suggestions for ``text`` based on its shape alone."""
    result = WORD_WORD.search(text)
    if result:
        left, right = result.group(1), result.group(2)
        candidates = _unique(populate_by_keyword(left) + populate_by_keyword(right))
        ranked = measure(result.group(0), candidates)
    elif NUMBER_WORD.search(text):
        result = NUMBER_WORD.search(text)
        ranked = measure(result.group(0), populate_by_value(result.group(1)))
    elif WORD_NUMBER.search(text):
        result = WORD_NUMBER.search(text)
        ranked = measure(result.group(0), populate_by_value(result.group(1)))
    elif NUMBER_ONLY.search(text):
        value = NUMBER_ONLY.search(text).group(0)
        ranked = measure(text, populate_by_value(value))
    elif WORD_ONLY.search(text):
        value = WORD_ONLY.search(text).group(0)
        ranked = measure(text, populate_by_keyword(value))
    else:
        ranked = measure(text, populate_by_keyword(text))

    return ranked[:limit] if limit is not None else ranked


def suggest_for(
    text: str,
    reference: Union[datetime, date, None] = None,
    *,
    settings: Optional[Settings] = None,
) -> List[str]:
    """Suggestions for ``text``, completing the last parsed expression if any."""
    settings = settings or Settings()
    limit = settings.suggestions.limit

    results = parse(text, reference, settings=settings)
    if results:
        last = results[-1]
        logger.debug(f"Completing {last.text!r} ({last.date.isoformat()})")
        return complete_date(last, settings.suggestions)[:limit]

    return suggest(text, limit=limit)
