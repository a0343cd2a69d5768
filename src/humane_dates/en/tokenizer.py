"""English token patterns.

Identifiers keep embedded and trailing periods so abbreviations such as
``a.m.`` or ``jan.`` arrive at the grammar as one token.
"""

from __future__ import annotations

import re
from typing import List

from humane_dates.core.tokenizer import IGNORE, Token, Tokenizer, pattern

WHITESPACE = "whitespace"
NUMBER = "number"
IDENT = "ident"
OP = "op"

PATTERNS = (
    pattern(WHITESPACE, r"\s+"),
    pattern(NUMBER, r"[0-9]+"),
    pattern(IDENT, r"[a-zA-Z]+(?:\.[a-zA-Z]+)*\.?"),
    pattern(OP, r"[:,.\-+\\/@]"),
    pattern(IGNORE, r".", re.DOTALL),
)

TOKENIZER = Tokenizer(PATTERNS)


def tokenize(text: str) -> List[Token]:
    return TOKENIZER.tokenize(text)
