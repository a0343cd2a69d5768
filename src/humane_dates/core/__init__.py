"""Language-agnostic tokenizer and parser-combinator engine."""

from humane_dates.core.feed import CharFeed, TokenFeed
from humane_dates.core.matcher import (
    Deferred,
    MaybeNode,
    Matcher,
    MultiNode,
    Node,
    SoloNode,
    ValueNode,
    alternation,
    deferred,
    direct,
    either,
    find,
    find_all,
    first_of,
    keyword,
    literal,
    match,
    optional,
    quantifier,
    regex,
    sequence,
    tag,
    text_of,
    unwrap_maybe,
    walk,
)
from humane_dates.core.tokenizer import DEFAULT_PATTERNS, Token, Tokenizer, pattern, tokenize

__all__ = [
    "CharFeed",
    "TokenFeed",
    "Token",
    "Tokenizer",
    "DEFAULT_PATTERNS",
    "pattern",
    "tokenize",
    "Node",
    "Matcher",
    "ValueNode",
    "SoloNode",
    "MultiNode",
    "MaybeNode",
    "Deferred",
    "match",
    "tag",
    "literal",
    "regex",
    "keyword",
    "sequence",
    "alternation",
    "either",
    "optional",
    "quantifier",
    "deferred",
    "direct",
    "unwrap_maybe",
    "walk",
    "find",
    "find_all",
    "first_of",
    "text_of",
]
