"""Public parsing entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Tuple, Union

from humane_dates.configuration.settings import Settings
from humane_dates.core.matcher import Node
from humane_dates.en.extract import SpecifiedFields, extract
from humane_dates.en.lexer import lex
from humane_dates.errors import ExtractionError

logger = logging.getLogger(__name__)

Reference = Union[datetime, date, None]


@dataclass
class ExtractedDate:
    """One date/time expression found in the input."""

    date: datetime
    reference: datetime
    specified: SpecifiedFields
    span: Tuple[int, int]
    text: str
    tree: Node = field(repr=False, compare=False)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "date": self.date.isoformat(),
            "reference": self.reference.isoformat(),
            "specified": self.specified.to_dict(),
            "span": list(self.span),
        }


def _as_datetime(reference: Reference) -> datetime:
    if reference is None:
        return datetime.now()
    if isinstance(reference, datetime):
        return reference
    if isinstance(reference, date):
        return datetime(reference.year, reference.month, reference.day)
    raise TypeError(f"reference must be a date or datetime, not {type(reference).__name__}")


def parse(
    text: str,
    reference: Reference = None,
    *,
    settings: Optional[Settings] = None,
) -> List[ExtractedDate]:
    """Find and resolve every date/time expression in ``text``.

    Args:
        text: Free-form English text.
        reference: Instant relative expressions are resolved against.
            Defaults to the current local time; a plain ``date`` means
            midnight of that day.
        settings: Parser limits. Defaults to :class:`Settings` defaults.

    Returns:
        One result per recognized expression, left to right. Text that is
        not a date or time is skipped, never rejected.
    """
    settings = settings or Settings()
    reference_time = _as_datetime(reference)
    results: List[ExtractedDate] = []

    for found in lex(text, max_steps=settings.parser.max_steps):
        try:
            state = extract(found.tree, reference_time)
        except ExtractionError as exc:
            logger.info(f"Dropped {text[found.start:found.end]!r}: {exc}")
            continue
        results.append(
            ExtractedDate(
                date=state.date,
                reference=state.reference,
                specified=state.specified,
                span=found.span,
                text=text[found.start:found.end],
                tree=found.tree,
            )
        )

    return results


def from_(
    text: str,
    reference: Reference = None,
    *,
    settings: Optional[Settings] = None,
) -> List[datetime]:
    """Timestamps only, in the order :func:`parse` finds them."""
    return [result.date for result in parse(text, reference, settings=settings)]
