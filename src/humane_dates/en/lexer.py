"""Driver that finds every date/time expression in a token stream.

The top grammar rule is tried at the current token. A match is recorded
and the cursor moves past it; otherwise exactly one token is skipped. The
cursor therefore advances on every iteration and recognized expressions
never overlap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from humane_dates.core.feed import TokenFeed
from humane_dates.core.matcher import Matcher, Node
from humane_dates.core.tokenizer import Token
from humane_dates.en.grammar import DATE_TIME
from humane_dates.en.tokenizer import tokenize
from humane_dates.errors import StepLimitExceeded

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Match:
    """One recognized expression and where it sits in the input."""

    tree: Node
    start: int
    end: int
    token_start: int
    token_end: int

    @property
    def span(self) -> tuple:
        return (self.start, self.end)

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "token_start": self.token_start,
            "token_end": self.token_end,
            "tree": self.tree.to_dict(),
        }


def categorize(
    tokens: Sequence[Token],
    *,
    grammar: Matcher = DATE_TIME,
    max_steps: Optional[int] = None,
) -> List[Match]:
    """Apply ``grammar`` across ``tokens`` left to right.

    Args:
        tokens: Token sequence from a tokenizer.
        grammar: Top rule to apply at each position.
        max_steps: Leaf match budget per attempt. An attempt that runs out
            is treated like any other non-match.

    Returns:
        Non-overlapping matches in order of appearance.
    """
    feed = TokenFeed(tokens, max_steps=max_steps)
    matches: List[Match] = []

    while feed.has_more():
        position = feed.cursor
        feed.reset_budget()
        try:
            tree = grammar(feed)
        except StepLimitExceeded as exc:
            logger.warning(
                f"Abandoned parse at token {position}: step budget of {exc.limit} exhausted"
            )
            feed.cursor = position
            tree = None
        except RecursionError:
            logger.warning(f"Abandoned parse at token {position}: expression nested too deeply")
            feed.cursor = position
            tree = None

        if tree is None or feed.cursor <= position or tree.start is None:
            feed.cursor = position + 1
            logger.debug(f"Skipped token {position}: {tokens[position].value!r}")
            continue

        matches.append(
            Match(
                tree=tree,
                start=tree.start,
                end=_phrase_end(tree.end, tokens[feed.cursor - 1]),
                token_start=position,
                token_end=feed.cursor,
            )
        )
        logger.debug(
            f"Matched {tree.tag} over tokens {position}..{feed.cursor} "
            f"(chars {tree.start}..{tree.end})"
        )

    return matches


def _phrase_end(end: int, last: Token) -> int:
    """Leave a sentence-ending period out of the span.

    Periods inside the final word (``p.m.``) mark an abbreviation and stay.
    """
    if len(last.value) > 1 and last.value.endswith(".") and "." not in last.value[:-1]:
        return end - 1
    return end


def lex(text: str, *, max_steps: Optional[int] = None) -> List[Match]:
    """Tokenize ``text`` with the English patterns and categorize it."""
    return categorize(tokenize(text), max_steps=max_steps)
