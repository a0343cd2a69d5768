"""Cursors over raw text and over token sequences.

Both feeds are owned by a single tokenize or parse call and never shared.
The token feed is the backtracking substrate of the combinator engine: a
matcher that fails must leave ``TokenFeed.cursor`` where it found it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

from humane_dates.errors import StepLimitExceeded

if TYPE_CHECKING:
    from humane_dates.core.tokenizer import Token


# Upper bound on the text handed to a pattern per lookahead.
LOOKAHEAD_WINDOW = 256


class CharFeed:
    """Cursor over a source string with anchored lookahead."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.cursor = 0

    def has_more(self) -> bool:
        return self.cursor < len(self.source)

    def lookahead(self) -> str:
        """Return a bounded slice of the unconsumed input."""
        return self.source[self.cursor:self.cursor + LOOKAHEAD_WINDOW]

    def consume(self, text: str) -> bool:
        """Advance past ``text`` if it is a live prefix of the remainder."""
        if not text or not self.source.startswith(text, self.cursor):
            return False
        self.cursor += len(text)
        return True

    def __repr__(self) -> str:
        return f"CharFeed(cursor={self.cursor}, size={len(self.source)})"


class TokenFeed:
    """Cursor over a fixed token sequence.

    ``max_steps`` bounds the number of leaf match attempts made through
    this feed. Once exhausted, :class:`StepLimitExceeded` is raised so a
    pathological input cannot backtrack indefinitely.
    """

    def __init__(
        self,
        source: Sequence["Token"],
        *,
        max_steps: Optional[int] = None,
    ) -> None:
        self.source: List["Token"] = list(source)
        self.size = len(self.source)
        self.cursor = 0
        self.max_steps = max_steps
        self.steps = 0

    def has_more(self) -> bool:
        return self.cursor < self.size

    def peek(self) -> Optional["Token"]:
        if self.cursor < self.size:
            return self.source[self.cursor]
        return None

    def step(self) -> None:
        """Charge one leaf match attempt against the budget."""
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise StepLimitExceeded(self.max_steps, position=self.cursor)

    def reset_budget(self) -> None:
        self.steps = 0

    def __repr__(self) -> str:
        return f"TokenFeed(cursor={self.cursor}, size={self.size}, steps={self.steps})"
