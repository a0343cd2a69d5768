"""English date and time phrase parsing."""

from humane_dates.en.api import ExtractedDate, from_, parse
from humane_dates.en.complete import complete_date
from humane_dates.en.extract import ExtractionState, SpecifiedFields, extract
from humane_dates.en.lexer import Match, categorize, lex
from humane_dates.en.suggest import suggest, suggest_for
from humane_dates.en.tokenizer import tokenize

__all__ = [
    "ExtractedDate",
    "ExtractionState",
    "Match",
    "SpecifiedFields",
    "categorize",
    "complete_date",
    "extract",
    "from_",
    "lex",
    "parse",
    "suggest",
    "suggest_for",
    "tokenize",
]
