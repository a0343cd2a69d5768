"""Semantic extraction: turn a parse tree into a concrete timestamp.

The extractor walks the tree produced by :mod:`humane_dates.en.grammar`,
dispatching on each node's tag, and mutates an :class:`ExtractionState`
that starts as a copy of the reference timestamp. Every rule that pins a
calendar field down marks it in :class:`SpecifiedFields`; marks are never
cleared.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional, Tuple

from humane_dates.core.matcher import (
    MultiNode,
    Node,
    SoloNode,
    ValueNode,
    direct,
    find,
    find_all,
    first_of,
    unwrap_maybe,
)
from humane_dates.en import calendar
from humane_dates.errors import ExtractionError, GrammarError

logger = logging.getLogger(__name__)

FIELDS = ("year", "month", "day", "hours", "minutes", "seconds")
DATE_FIELDS = ("year", "month", "day")
TIME_FIELDS = ("hours", "minutes", "seconds")

DIRECTION_OFFSETS = {"last": -1, "this": 0, "next": 1}
DAY_OFFSETS = {"today": 0, "tomorrow": 1, "tmrw": 1, "yesterday": -1}

Clock = Tuple[int, int, int]


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass
class SpecifiedFields:
    """Which calendar fields the input text constrained."""

    year: bool = False
    month: bool = False
    day: bool = False
    hours: bool = False
    minutes: bool = False
    seconds: bool = False

    def mark(self, *names: str) -> None:
        for name in names:
            if name not in FIELDS:
                raise ValueError(f"Unknown field: {name!r}")
            setattr(self, name, True)

    def mark_all(self) -> None:
        self.mark(*FIELDS)

    @property
    def date(self) -> bool:
        return self.year or self.month or self.day

    @property
    def time(self) -> bool:
        return self.hours or self.minutes or self.seconds

    def to_dict(self) -> Dict[str, bool]:
        return {name: getattr(self, name) for name in FIELDS}


@dataclass
class ExtractionState:
    date: datetime
    reference: datetime
    specified: SpecifiedFields = field(default_factory=SpecifiedFields)

    @classmethod
    def from_reference(cls, reference: datetime) -> "ExtractionState":
        return cls(date=reference, reference=reference)


@dataclass(frozen=True)
class ClockTime:
    """A time of day read from a clock node, with the fields it states."""

    hour: int
    minute: int = 0
    second: int = 0
    fields: Tuple[str, ...] = ("hours",)

    @property
    def value(self) -> Clock:
        return (self.hour, self.minute, self.second)


# ---------------------------------------------------------------------------
# Node readers
# ---------------------------------------------------------------------------


def _word(node: Optional[Node]) -> str:
    if not isinstance(node, ValueNode):
        raise GrammarError(getattr(node, "tag", None), message="Expected a word leaf")
    return node.text.lower().rstrip(".")


def _number(node: Optional[Node]) -> int:
    if not isinstance(node, ValueNode):
        raise GrammarError(getattr(node, "tag", None), message="Expected a number leaf")
    return int(node.text)


def _optional_number(node: Optional[Node]) -> Optional[int]:
    return _number(node) if node is not None else None


def _directional_offset(node: Optional[Node]) -> int:
    """Sum the ``last``/``this``/``next`` words of a directional sequence."""
    if node is None:
        raise GrammarError(None, message="Missing directional sequence")
    return sum(DIRECTION_OFFSETS[_word(leaf)] for leaf in find_all(node, "directional"))


def _month_and_day(node: Node) -> Tuple[int, Optional[int]]:
    """Month number and optional day from a month part or specific date."""
    month = first_of(
        lambda: find(node, "month"),
        lambda: find(node, "month-number"),
    )
    if month is None:
        raise GrammarError(node.tag, message=f"No month under {node.tag!r}")
    if month.tag == "month":
        month_value = calendar.month_number(month.text)
    else:
        month_value = _number(month)
    return month_value, _optional_number(find(node, "day"))


def read_clock(node: Node) -> ClockTime:
    """Read a clock node (12-hour, 24-hour, named instant or bare hour)."""
    node = _through_wrappers(node, "time", "full-time", "at-time")

    if node.tag == "complete-time":
        word = _word(node)
        hour = 0 if word == "midnight" else 12
        return ClockTime(hour, 0, 0, TIME_FIELDS)

    if node.tag == "at-hour":
        return ClockTime(_number(find(node, "hour")))

    if node.tag not in ("hour-12-clock", "hour-24-clock"):
        raise GrammarError(node.tag)

    hour = _number(find(node, "hour"))
    minute = _optional_number(find(node, "minutes"))
    second = _optional_number(find(node, "seconds"))

    if node.tag == "hour-12-clock":
        hour = calendar.to_24_hour(hour, find(node, "meridiem").text)

    fields = ["hours"]
    if minute is not None:
        fields.append("minutes")
    if second is not None:
        fields.append("seconds")
    return ClockTime(hour, minute or 0, second or 0, tuple(fields))


def _through_wrappers(node: Node, *tags: str) -> Node:
    """Descend through single-purpose wrappers tagged with ``tags``."""
    while node.tag in tags:
        if isinstance(node, SoloNode):
            node = node.child
        elif node.tag == "at-time":
            node = direct(node, "full-time")
        else:
            break
    return node


def _unit_value(node: Optional[Node]) -> Tuple[int, str]:
    """Amount and canonical unit of a ``unit-value`` node."""
    if node is None:
        raise GrammarError(None, message="Missing unit value")
    amount_node = first_of(
        lambda: direct(node, "number"),
        lambda: direct(node, "singular"),
    )
    unit_node = first_of(
        lambda: direct(node, "time-unit"),
        lambda: direct(node, "date-unit"),
    )
    if amount_node is None or unit_node is None:
        raise GrammarError(node.tag, message="Incomplete unit value")
    amount = 1 if amount_node.tag == "singular" else _number(amount_node)
    return amount, calendar.unit_name(unit_node.text)


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------


class Extractor:
    """Apply one parse tree to an :class:`ExtractionState`."""

    def __init__(self, state: ExtractionState) -> None:
        self.state = state
        self._rules: Dict[str, Callable[[Node], None]] = {
            # wrappers
            "date-time": self._solo,
            "independent-date-time": self._solo,
            "date": self._solo,
            "time": self._solo,
            "full-date": self._solo,
            "full-time": self._solo,
            "specific-date": self._solo,
            "on-date": self._on_date,
            # sequences and offsets
            "date-time-sequence": self._date_then_time,
            "time-date-sequence": self._date_then_time,
            "date-time-ago": self._ago,
            "in-date-time": self._in,
            "relational-date-time": self._relational,
            # dates
            "iso-date": self._calendar_date,
            "slash-date": self._calendar_date,
            "month-day-year": self._calendar_date,
            "year-month-day": self._calendar_date,
            "month-part": self._month_part,
            "weekday": self._weekday,
            "complete-date": self._complete_date,
            "directional-date": self._directional_date,
            "relative-day": self._relative_day,
            "relative-month": self._relative_month,
            # times
            "hour-12-clock": self._clock,
            "hour-24-clock": self._clock,
            "at-hour": self._clock,
            "at-time": self._clock,
            "complete-time": self._clock,
            "directional-time": self._directional_time,
            "now": self._now,
        }

    # -- dispatch ----------------------------------------------------------

    def visit(self, node: Optional[Node]) -> None:
        node = unwrap_maybe(node)
        if node is None:
            raise GrammarError(None, message="Empty node in parse tree")
        rule = self._rules.get(node.tag)
        if rule is None:
            raise GrammarError(node.tag)
        rule(node)

    def _mark(self, names: Iterable[str]) -> None:
        self.state.specified.mark(*names)

    def _solo(self, node: Node) -> None:
        if not isinstance(node, SoloNode):
            raise GrammarError(node.tag, message=f"{node.tag!r} should wrap one child")
        self.visit(node.child)

    def _on_date(self, node: Node) -> None:
        self.visit(direct(node, "full-date"))

    def _date_then_time(self, node: Node) -> None:
        # The date is fixed first so directional times count from it.
        self.visit(direct(node, "date"))
        self.visit(direct(node, "time"))

    # -- offsets -----------------------------------------------------------

    def _move(self, compute: Callable[[datetime], datetime], message: str, **details) -> None:
        """Replace the state date with ``compute(date)``, or fail as an extraction error."""
        try:
            self.state.date = compute(self.state.date)
        except (OverflowError, ValueError) as exc:
            raise ExtractionError(f"{message}: {exc}", details=details) from exc

    def _shift(self, unit: str, amount: int) -> None:
        self._move(
            lambda value: calendar.shift(value, unit, amount),
            f"Shifting by {amount} {unit} leaves the supported date range",
            unit=unit,
            amount=amount,
        )

    def _ago(self, node: Node) -> None:
        amount, unit = _unit_value(direct(node, "unit-value"))
        self._shift(unit, -amount)
        self.state.specified.mark_all()

    def _in(self, node: Node) -> None:
        amount, unit = _unit_value(direct(node, "unit-value"))
        self._shift(unit, amount)
        self.state.specified.mark_all()

    def _relational(self, node: Node) -> None:
        amount, unit = _unit_value(direct(node, "unit-value"))
        relation = _word(direct(node, "relation"))
        self.visit(direct(node, "date-time"))
        self._shift(unit, -amount if relation == "before" else amount)
        self._mark(calendar.UNIT_FIELDS[unit])

    # -- dates -------------------------------------------------------------

    def _set_date(self, **fields: Optional[int]) -> None:
        self._move(lambda value: calendar.set_date(value, **fields), "Invalid date", **fields)

    def _calendar_date(self, node: Node) -> None:
        year = _number(find(node, "year"))
        month, day = _month_and_day(node)
        self._set_date(year=year, month=month, day=day)
        self._mark(("year", "month") + (("day",) if day is not None else ()))

    def _month_part(self, node: Node) -> None:
        month, day = _month_and_day(node)
        self._set_date(month=month, day=day)
        self._mark(("month",) + (("day",) if day is not None else ()))

    def _weekday(self, node: Node) -> None:
        target = calendar.weekday_number(node.text)
        self._move(
            lambda value: calendar.upcoming_weekday(value, target),
            "Weekday leaves the supported date range",
            weekday=target,
        )
        self._mark(DATE_FIELDS)

    def _complete_date(self, node: Node) -> None:
        offset = DAY_OFFSETS.get(_word(node))
        if offset is None:
            raise GrammarError(node.tag, message=f"Unknown day word {node.text!r}")
        self._shift("days", offset)
        self._mark(DATE_FIELDS)

    def _directional_date(self, node: Node) -> None:
        offset = _directional_offset(direct(node, "directional-sequence"))
        target = node.children[-1]

        if target.tag == "weekday":
            weekday = calendar.weekday_number(target.text)
            self._move(
                lambda value: calendar.directional_weekday(value, weekday, offset),
                "Weekday leaves the supported date range",
                weekday=weekday,
                offset=offset,
            )
            self._mark(DATE_FIELDS)
        elif target.tag == "month-part":
            month, day = _month_and_day(target)
            year = calendar.directional_year(self.state.date, month, day, offset)
            self._set_date(year=year, month=month, day=day)
            self._mark(("year", "month") + (("day",) if day is not None else ()))
        elif target.tag == "date-unit":
            unit = calendar.unit_name(target.text)
            self._shift(unit, offset)
            self._mark(calendar.UNIT_FIELDS[unit])
        else:
            raise GrammarError(target.tag)

    def _relative_day(self, node: Node) -> None:
        offset = _directional_offset(direct(node, "directional-sequence"))
        weekday = calendar.weekday_number(direct(node, "weekday").text)
        self._move(
            lambda value: calendar.week_day(value, weekday, offset),
            "Weekday leaves the supported date range",
            weekday=weekday,
            offset=offset,
        )
        self._mark(DATE_FIELDS)

    def _relative_month(self, node: Node) -> None:
        offset = _directional_offset(direct(node, "directional-sequence"))
        month, day = _month_and_day(direct(node, "month-part"))
        self._set_date(year=self.state.date.year + offset, month=month, day=day)
        self._mark(("year", "month") + (("day",) if day is not None else ()))

    # -- times -------------------------------------------------------------

    def _apply_clock(self, clock: ClockTime) -> None:
        self.state.date = calendar.set_time(
            self.state.date, clock.hour, clock.minute, clock.second
        )
        self._mark(clock.fields)

    def _clock(self, node: Node) -> None:
        self._apply_clock(read_clock(node))

    def _directional_time(self, node: Node) -> None:
        offset = _directional_offset(direct(node, "directional-sequence"))
        target = node.children[-1]

        if target.tag == "time-unit":
            unit = calendar.unit_name(target.text)
            self._shift(unit, offset)
            self._mark(calendar.UNIT_FIELDS[unit])
            return

        clock = read_clock(target)
        self._move(
            lambda value: calendar.directional_clock_day(value, clock.value, offset),
            "Clock time leaves the supported date range",
            offset=offset,
        )
        self._mark(DATE_FIELDS)
        self._apply_clock(clock)

    def _now(self, node: Node) -> None:
        self.state.date = self.state.reference
        self.state.specified.mark_all()


def extract(tree: Node, reference: datetime) -> ExtractionState:
    """Resolve ``tree`` against ``reference``.

    Raises:
        GrammarError: The tree contains a tag with no extraction rule.
        ExtractionError: The phrase resolves outside the representable range,
            or nests too deeply to resolve.
    """
    state = ExtractionState.from_reference(reference)
    try:
        Extractor(state).visit(tree)
    except RecursionError as exc:
        raise ExtractionError("Expression is nested too deeply to resolve") from exc
    logger.debug(
        f"Resolved {tree.tag} to {state.date.isoformat()} "
        f"(specified: {', '.join(k for k, v in state.specified.to_dict().items() if v) or 'none'})"
    )
    return state
