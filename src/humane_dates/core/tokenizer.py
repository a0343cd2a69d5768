"""Pattern-driven tokenizer.

A tokenizer is an ordered list of ``(tag, regex)`` patterns. At each
position the first pattern matching a non-empty prefix wins. The final
pattern of every list is a single-character catch-all, so tokenization is
total: any string is covered by tokens with no gaps or overlaps.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from humane_dates.core.feed import CharFeed


@dataclass(frozen=True)
class Token:
    """A lexical unit with its exact source span."""

    tag: str
    value: str
    start: int
    end: int

    def to_dict(self) -> dict:
        return {
            "tag": self.tag,
            "value": self.value,
            "start": self.start,
            "end": self.end,
        }


Pattern = Callable[[CharFeed], Optional[Token]]

IGNORE = "ignore"


def pattern(tag: str, value: str, flags: int = 0) -> Pattern:
    """Build a pattern that emits a ``tag`` token for an anchored regex match."""
    regexp = re.compile(value, flags)

    def _match(feed: CharFeed) -> Optional[Token]:
        result = regexp.match(feed.lookahead())
        if result is None:
            return None
        start = feed.cursor
        if not feed.consume(result.group(0)):
            return None
        return Token(tag=tag, value=result.group(0), start=start, end=feed.cursor)

    return _match


DEFAULT_PATTERNS: Sequence[Pattern] = (
    pattern("whitespace", r"\s+"),
    pattern("number", r"[0-9]+"),
    pattern("ident", r"\w+"),
    pattern("op", r"[:,.\-+\\/@]"),
    pattern(IGNORE, r".", re.DOTALL),
)


class Tokenizer:
    """Convert text into a flat token sequence."""

    def __init__(self, patterns: Sequence[Pattern] = DEFAULT_PATTERNS) -> None:
        if not patterns:
            raise ValueError("Tokenizer requires at least one pattern")
        self.patterns = tuple(patterns)

    def tokenize(self, text: str) -> List[Token]:
        tokens: List[Token] = []
        feed = CharFeed(text)
        while feed.has_more():
            for candidate in self.patterns:
                token = candidate(feed)
                if token is not None:
                    tokens.append(token)
                    break
            else:
                # Pattern lists without a catch-all still make progress.
                start = feed.cursor
                char = text[start]
                feed.consume(char)
                tokens.append(Token(tag=IGNORE, value=char, start=start, end=feed.cursor))
        return tokens


_default_tokenizer = Tokenizer()


def tokenize(text: str) -> List[Token]:
    """Tokenize with :data:`DEFAULT_PATTERNS`."""
    return _default_tokenizer.tokenize(text)
