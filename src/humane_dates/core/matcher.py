"""Backtracking parser combinators over a :class:`TokenFeed`.

Every matcher is a callable ``matcher(feed) -> Optional[Node]``. When a
matcher returns ``None`` the feed cursor is exactly where it was before the
call. Composite nodes derive their span from their children, so the span of
any node bounds the source text it matched.

The engine knows nothing about dates; the English grammar in
:mod:`humane_dates.en.grammar` is assembled from these primitives.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, TypeVar, Union

from humane_dates.core.feed import TokenFeed
from humane_dates.core.tokenizer import Token


# ---------------------------------------------------------------------------
# Parse tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValueNode:
    """A single matched token."""

    tag: str
    text: str
    start: int
    end: int

    kind = "value"

    @property
    def children(self) -> Tuple["Node", ...]:
        return ()

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "tag": self.tag,
            "text": self.text,
            "start": self.start,
            "end": self.end,
        }


@dataclass(frozen=True)
class SoloNode:
    """A named wrapper around the one alternative that matched."""

    tag: str
    child: "Node"
    start: Optional[int]
    end: Optional[int]

    kind = "solo"

    @property
    def children(self) -> Tuple["Node", ...]:
        return (self.child,)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "tag": self.tag,
            "start": self.start,
            "end": self.end,
            "child": self.child.to_dict(),
        }


@dataclass(frozen=True)
class MultiNode:
    """An ordered run of children matched by a sequence or quantifier."""

    tag: str
    items: Tuple["Node", ...]
    start: Optional[int]
    end: Optional[int]

    kind = "multi"

    @property
    def children(self) -> Tuple["Node", ...]:
        return self.items

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "tag": self.tag,
            "start": self.start,
            "end": self.end,
            "children": [child.to_dict() for child in self.items],
        }


@dataclass(frozen=True)
class MaybeNode:
    """Result of :func:`optional`; ``child`` is ``None`` when nothing matched."""

    child: Optional["Node"] = None
    tag: Optional[str] = field(default=None)

    kind = "maybe"

    @property
    def start(self) -> Optional[int]:
        return self.child.start if self.child is not None else None

    @property
    def end(self) -> Optional[int]:
        return self.child.end if self.child is not None else None

    @property
    def children(self) -> Tuple["Node", ...]:
        return (self.child,) if self.child is not None else ()

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "child": self.child.to_dict() if self.child is not None else None,
        }


Node = Union[ValueNode, SoloNode, MultiNode, MaybeNode]
Matcher = Callable[[TokenFeed], Optional[Node]]
Predicate = Callable[[Token], bool]


# ---------------------------------------------------------------------------
# Leaf matchers
# ---------------------------------------------------------------------------


def match(tag: str, predicate: Predicate) -> Matcher:
    """Consume one token satisfying ``predicate`` and emit it as ``tag``."""

    def _match(feed: TokenFeed) -> Optional[Node]:
        token = feed.peek()
        if token is None:
            return None
        feed.step()
        if not predicate(token):
            return None
        feed.cursor += 1
        return ValueNode(tag=tag, text=token.value, start=token.start, end=token.end)

    return _match


def tag(name: str, token_tag: Optional[str] = None) -> Matcher:
    """Match any token whose lexical tag is ``token_tag`` (defaults to ``name``)."""
    expected = token_tag or name
    return match(name, lambda token: token.tag == expected)


def literal(name: str, text: str) -> Matcher:
    """Match a token whose text is exactly ``text``."""
    return match(name, lambda token: token.value == text)


def regex(name: str, expression: str, flags: int = re.IGNORECASE) -> Matcher:
    """Match a token whose full text matches ``expression``."""
    compiled = re.compile(expression, flags)
    return match(name, lambda token: compiled.fullmatch(token.value) is not None)


def keyword(name: str, *words: str) -> Matcher:
    """Case-insensitive word match allowing a trailing abbreviation period."""
    if not words:
        raise ValueError(f"keyword {name!r} needs at least one word")
    alternatives = "|".join(re.escape(word) for word in words)
    return regex(name, rf"(?:{alternatives})\.?")


# ---------------------------------------------------------------------------
# Composite matchers
# ---------------------------------------------------------------------------


def _span(children: Sequence[Node]) -> Tuple[Optional[int], Optional[int]]:
    spanned = [child for child in children if child.start is not None]
    if not spanned:
        return None, None
    return spanned[0].start, spanned[-1].end


def sequence(name: str, matchers: Sequence[Matcher]) -> Matcher:
    """Match every matcher in order; fail as a whole if any one fails.

    A sequence whose children are all empty optionals has no span and
    fails too.
    """
    parts = tuple(matchers)

    def _match(feed: TokenFeed) -> Optional[Node]:
        saved = feed.cursor
        children: List[Node] = []
        for part in parts:
            node = part(feed)
            if node is None:
                feed.cursor = saved
                return None
            children.append(node)
        start, end = _span(children)
        if start is None:
            feed.cursor = saved
            return None
        return MultiNode(tag=name, items=tuple(children), start=start, end=end)

    return _match


def either(matchers: Sequence[Matcher]) -> Matcher:
    """Return the first alternative that matches, without wrapping it."""
    options = tuple(matchers)

    def _match(feed: TokenFeed) -> Optional[Node]:
        for option in options:
            node = option(feed)
            if node is not None:
                return node
        return None

    return _match


def alternation(name: str, matchers: Sequence[Matcher]) -> Matcher:
    """Ordered choice; the first success is wrapped in a ``name`` node."""
    choose = either(matchers)

    def _match(feed: TokenFeed) -> Optional[Node]:
        node = choose(feed)
        if node is None:
            return None
        return SoloNode(tag=name, child=node, start=node.start, end=node.end)

    return _match


def optional(matcher: Matcher) -> Matcher:
    """Always succeed, wrapping the inner result (if any) in a maybe node."""

    def _match(feed: TokenFeed) -> Optional[Node]:
        return MaybeNode(child=matcher(feed))

    return _match


def quantifier(
    name: str,
    matcher: Matcher,
    minimum: int = 0,
    maximum: Optional[int] = None,
) -> Matcher:
    """Greedy bounded repetition without retrying shorter counts."""
    if minimum < 0 or (maximum is not None and maximum < minimum):
        raise ValueError(f"invalid bounds for {name!r}: {minimum}..{maximum}")

    def _match(feed: TokenFeed) -> Optional[Node]:
        saved = feed.cursor
        children: List[Node] = []
        while maximum is None or len(children) < maximum:
            before = feed.cursor
            node = matcher(feed)
            if node is None:
                break
            children.append(node)
            # An empty match would repeat forever.
            if feed.cursor == before:
                break
        if len(children) < minimum:
            feed.cursor = saved
            return None
        start, end = _span(children)
        return MultiNode(tag=name, items=tuple(children), start=start, end=end)

    return _match


class Deferred:
    """A matcher cell that is bound after construction.

    Lets a grammar rule refer to itself, or to a rule defined later.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._matcher: Optional[Matcher] = None

    def define(self, matcher: Matcher) -> Matcher:
        if self._matcher is not None:
            raise ValueError(f"deferred rule {self.name!r} is already defined")
        self._matcher = matcher
        return matcher

    @property
    def defined(self) -> bool:
        return self._matcher is not None

    def __call__(self, feed: TokenFeed) -> Optional[Node]:
        if self._matcher is None:
            raise RuntimeError(f"deferred rule {self.name!r} used before definition")
        return self._matcher(feed)

    def __repr__(self) -> str:
        return f"Deferred({self.name!r}, defined={self.defined})"


def deferred(name: str) -> Deferred:
    return Deferred(name)


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------

T = TypeVar("T")


def unwrap_maybe(node: Optional[Node]) -> Optional[Node]:
    """Strip any maybe wrappers, returning the inner node or ``None``."""
    while isinstance(node, MaybeNode):
        node = node.child
    return node


def walk(node: Node) -> Iterator[Node]:
    """Depth-first pre-order traversal."""
    yield node
    for child in node.children:
        yield from walk(child)


def find(node: Optional[Node], *tags: str) -> Optional[Node]:
    """First node (pre-order, including ``node``) carrying one of ``tags``."""
    if node is None:
        return None
    for candidate in walk(node):
        if candidate.tag in tags:
            return candidate
    return None


def find_all(node: Optional[Node], *tags: str) -> List[Node]:
    if node is None:
        return []
    return [candidate for candidate in walk(node) if candidate.tag in tags]


def direct(node: Node, *tags: str) -> Optional[Node]:
    """First immediate child (looking through maybe wrappers) tagged with ``tags``."""
    for child in node.children:
        inner = unwrap_maybe(child)
        if inner is not None and inner.tag in tags:
            return inner
    return None


def first_of(*lookups: Callable[[], Optional[T]]) -> Optional[T]:
    """Evaluate ``lookups`` in order and return the first non-``None`` result."""
    for lookup in lookups:
        value = lookup()
        if value is not None:
            return value
    return None


def text_of(node: Optional[Node]) -> str:
    """Concatenated text of the value leaves under ``node``."""
    if node is None:
        return ""
    return "".join(leaf.text for leaf in walk(node) if isinstance(leaf, ValueNode))
