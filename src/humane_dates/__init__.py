"""Parse English date and time phrases into timestamps.

    >>> from datetime import datetime
    >>> from humane_dates import from_
    >>> from_("3 days ago", datetime(2024, 1, 15, 10))
    [datetime.datetime(2024, 1, 12, 10, 0)]
"""

from humane_dates.en import (
    ExtractedDate,
    SpecifiedFields,
    complete_date,
    from_,
    parse,
    suggest,
    suggest_for,
)

__version__ = "0.1.0"

__all__ = [
    "ExtractedDate",
    "SpecifiedFields",
    "complete_date",
    "from_",
    "parse",
    "suggest",
    "suggest_for",
    "__version__",
]
