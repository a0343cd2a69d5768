"""Grammar for English date and time phrases.

Rules are built bottom-up from :mod:`humane_dates.core.matcher` once, at
import time, and never mutated afterwards. Ordered choice commits to the
first alternative that succeeds, so each alternation lists its longer or
more specific productions first.

``DATE_TIME`` is the top rule applied by the driver.
"""

from __future__ import annotations

from humane_dates.core.matcher import (
    alternation,
    deferred,
    either,
    keyword,
    literal,
    optional,
    quantifier,
    regex,
    sequence,
    tag,
)
from humane_dates.en.tokenizer import NUMBER as NUMBER_TOKEN
from humane_dates.en.tokenizer import WHITESPACE as WHITESPACE_TOKEN

# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

MONTH_WORDS = (
    "january", "jan",
    "february", "feb",
    "march", "mar",
    "april", "apr",
    "may",
    "june", "jun",
    "july", "jul",
    "august", "aug",
    "september", "sept", "sep",
    "october", "oct",
    "november", "nov",
    "december", "dec",
)

WEEKDAY_WORDS = (
    "sunday", "sun",
    "monday", "mon",
    "tuesday", "tues", "tue",
    "wednesday", "wed",
    "thursday", "thurs", "thur", "thu",
    "friday", "fri",
    "saturday", "sat",
)

TIME_UNIT_WORDS = (
    "seconds", "second", "secs", "sec",
    "minutes", "minute", "mins", "min",
    "hours", "hour", "hrs", "hr",
)

DATE_UNIT_WORDS = (
    "days", "day",
    "weeks", "week", "wks", "wk",
    "months", "month", "mos", "mo",
    "years", "year", "yrs", "yr",
)

# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------

WS = tag("whitespace", WHITESPACE_TOKEN)
OPT_WS = optional(WS)
NUMBER = tag("number", NUMBER_TOKEN)
COMMA = literal("comma", ",")
OPT_COMMA = optional(COMMA)
COLON = literal("colon", ":")
DASH = literal("dash", "-")
SLASH = literal("slash", "/")

MERIDIEM = keyword("meridiem", "am", "pm", "a.m", "p.m")
TIME_UNIT = keyword("time-unit", *TIME_UNIT_WORDS)
DATE_UNIT = keyword("date-unit", *DATE_UNIT_WORDS)
NOW = keyword("now", "now")
COMPLETE_TIME = keyword("complete-time", "midnight", "noon", "midday")
COMPLETE_DATE = keyword("complete-date", "today", "tomorrow", "tmrw", "yesterday")
RELATION = keyword("relation", "before", "after", "from", "past")
DIRECTIONAL = keyword("directional", "last", "next", "this")
MONTHS = keyword("month", *MONTH_WORDS)
DAYS = keyword("weekday", *WEEKDAY_WORDS)
ORDINAL = keyword("ordinal", "st", "nd", "rd", "th")
SINGULAR = keyword("singular", "a", "an")
AGO = keyword("ago", "ago")
IN = keyword("in", "in")
AT = keyword("at", "at", "@")
ON = keyword("on", "on")
OF = keyword("of", "of")
WEEK_WORD = keyword("week-word", "week")
YEAR_WORD = keyword("year-word", "year")

HOUR_12 = regex("hour", r"0?[1-9]|1[0-2]")
HOUR_24 = regex("hour", r"[01]?[0-9]|2[0-3]")
MINUTES = regex("minutes", r"[0-5]?[0-9]")
SECONDS = regex("seconds", r"[0-5]?[0-9]")
DAY_NUMBER = regex("day", r"0?[1-9]|[12][0-9]|3[01]")
MONTH_NUMBER = regex("month-number", r"0?[1-9]|1[0-2]")
YEARS = regex("year", r"[1-9][0-9]{3}")
ANY_YEAR = regex("year", r"[0-9]{1,4}")

# ---------------------------------------------------------------------------
# Calendar dates
# ---------------------------------------------------------------------------

ORDINAL_NUMBER = sequence("ordinal-number", [DAY_NUMBER, ORDINAL])
DAY_PART = alternation("day-part", [ORDINAL_NUMBER, DAY_NUMBER])

YEAR_PART = alternation(
    "year-part",
    [
        sequence("annotated-year", [YEAR_WORD, WS, ANY_YEAR]),
        YEARS,
    ],
)

MONTH_PART = alternation(
    "month-part",
    [
        sequence("month-day", [MONTHS, OPT_WS, DAY_PART]),
        sequence("day-of-month", [DAY_PART, WS, OF, WS, MONTHS]),
        sequence("day-month", [DAY_PART, WS, MONTHS]),
        MONTHS,
    ],
)

SPECIFIC_DATE = alternation(
    "specific-date",
    [
        sequence("iso-date", [YEARS, DASH, MONTH_NUMBER, DASH, DAY_NUMBER]),
        sequence("slash-date", [MONTH_NUMBER, SLASH, DAY_NUMBER, SLASH, YEARS]),
        sequence("month-day-year", [MONTH_PART, OPT_COMMA, WS, YEAR_PART]),
        sequence("year-month-day", [YEAR_PART, WS, MONTH_PART]),
    ],
)

# ---------------------------------------------------------------------------
# Clock times
# ---------------------------------------------------------------------------

SECONDS_PART = sequence("seconds-part", [COLON, SECONDS])
MINUTES_PART = sequence("minutes-part", [COLON, MINUTES, optional(SECONDS_PART)])

HOUR_12_CLOCK = sequence(
    "hour-12-clock", [HOUR_12, optional(MINUTES_PART), OPT_WS, MERIDIEM]
)
HOUR_24_CLOCK = sequence("hour-24-clock", [HOUR_24, MINUTES_PART])

FULL_TIME = alternation("full-time", [HOUR_12_CLOCK, HOUR_24_CLOCK, COMPLETE_TIME])
AT_TIME = sequence("at-time", [AT, OPT_WS, FULL_TIME])
AT_HOUR = sequence("at-hour", [AT, OPT_WS, HOUR_24])

TIME = alternation("time", [AT_TIME, AT_HOUR, FULL_TIME])

# ---------------------------------------------------------------------------
# Directional phrases
# ---------------------------------------------------------------------------

DIRECTIONAL_PART = sequence("directional-part", [DIRECTIONAL, WS])
DIRECTIONAL_SEQUENCE = quantifier("directional-sequence", DIRECTIONAL_PART, 1)

DIRECTIONAL_DATE = sequence(
    "directional-date",
    [DIRECTIONAL_SEQUENCE, either([MONTH_PART, DATE_UNIT, DAYS])],
)
DIRECTIONAL_TIME = sequence(
    "directional-time",
    [DIRECTIONAL_SEQUENCE, either([FULL_TIME, TIME_UNIT])],
)

# "friday next week", "january last year"
RELATIVE_DAY = sequence("relative-day", [DAYS, WS, DIRECTIONAL_SEQUENCE, WEEK_WORD])
RELATIVE_MONTH = sequence(
    "relative-month", [MONTH_PART, WS, DIRECTIONAL_SEQUENCE, YEAR_WORD]
)

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

FULL_DATE = alternation(
    "full-date",
    [
        SPECIFIC_DATE,
        RELATIVE_DAY,
        RELATIVE_MONTH,
        DIRECTIONAL_DATE,
        MONTH_PART,
        DAYS,
        COMPLETE_DATE,
    ],
)
ON_DATE = sequence("on-date", [ON, WS, FULL_DATE])
DATE = alternation("date", [ON_DATE, FULL_DATE])

# ---------------------------------------------------------------------------
# Offsets and top level
# ---------------------------------------------------------------------------

# Bound below, once every production it refers to exists.
DATE_TIME = deferred("date-time")

UNIT_VALUE = sequence(
    "unit-value",
    [either([NUMBER, SINGULAR]), OPT_WS, either([TIME_UNIT, DATE_UNIT])],
)

DATE_TIME_AGO = sequence("date-time-ago", [UNIT_VALUE, WS, AGO])
IN_DATE_TIME = sequence("in-date-time", [IN, WS, UNIT_VALUE])
RELATIONAL_DATE_TIME = sequence(
    "relational-date-time", [UNIT_VALUE, WS, RELATION, WS, DATE_TIME]
)

DATE_TIME_SEQUENCE = sequence("date-time-sequence", [DATE, OPT_COMMA, WS, TIME])
TIME_DATE_SEQUENCE = sequence("time-date-sequence", [TIME, OPT_COMMA, WS, DATE])

INDEPENDENT_DATE_TIME = alternation(
    "independent-date-time", [DATE, TIME, DIRECTIONAL_TIME, NOW]
)

DATE_TIME.define(
    alternation(
        "date-time",
        [
            DATE_TIME_SEQUENCE,
            TIME_DATE_SEQUENCE,
            DATE_TIME_AGO,
            IN_DATE_TIME,
            RELATIONAL_DATE_TIME,
            INDEPENDENT_DATE_TIME,
        ],
    )
)
