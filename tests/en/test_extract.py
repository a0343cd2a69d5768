"""Tests for semantic extraction.

Every case resolves against Monday 2024-01-15 10:00.
"""

from datetime import datetime

import pytest

from humane_dates.core.matcher import ValueNode
from humane_dates.en.extract import (
    ExtractionState,
    Extractor,
    SpecifiedFields,
    extract,
    read_clock,
)
from humane_dates.en.lexer import lex
from humane_dates.errors import ExtractionError, GrammarError


@pytest.fixture
def resolve(reference):
    def _resolve(text):
        matches = lex(text)
        assert len(matches) == 1, f"{text!r} gave {len(matches)} matches"
        return extract(matches[0].tree, reference)

    return _resolve


def marked(state):
    return {name for name, value in state.specified.to_dict().items() if value}


ALL = {"year", "month", "day", "hours", "minutes", "seconds"}
DATE = {"year", "month", "day"}


class TestScenarios:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("tomorrow", datetime(2024, 1, 16, 10)),
            ("yesterday", datetime(2024, 1, 14, 10)),
            ("today", datetime(2024, 1, 15, 10)),
            ("3 days ago", datetime(2024, 1, 12, 10)),
            ("an hour ago", datetime(2024, 1, 15, 9)),
            ("in 2 hours", datetime(2024, 1, 15, 12)),
            ("next friday", datetime(2024, 1, 19, 10)),
            ("last monday", datetime(2024, 1, 8, 10)),
            ("friday", datetime(2024, 1, 19, 10)),
            ("monday", datetime(2024, 1, 15, 10)),
            ("friday next week", datetime(2024, 1, 26, 10)),
            ("next week", datetime(2024, 1, 22, 10)),
            ("last month", datetime(2023, 12, 15, 10)),
            ("next year", datetime(2025, 1, 15, 10)),
            ("last january", datetime(2023, 1, 15, 10)),
            ("next march", datetime(2024, 3, 15, 10)),
            ("next january", datetime(2025, 1, 15, 10)),
            ("last jan 10", datetime(2024, 1, 10, 10)),
            ("last jan 20", datetime(2023, 1, 20, 10)),
            ("january next year", datetime(2025, 1, 15, 10)),
            ("2 weeks before dec 25", datetime(2024, 12, 11, 10)),
            ("3 days after tomorrow", datetime(2024, 1, 19, 10)),
            ("jan 5th, 2024", datetime(2024, 1, 5, 10)),
            ("2024-03-10", datetime(2024, 3, 10, 10)),
            ("12/25/2024", datetime(2024, 12, 25, 10)),
            ("5th of march", datetime(2024, 3, 5, 10)),
            ("in 3 mos", datetime(2024, 4, 15, 10)),
            ("2 mo ago", datetime(2023, 11, 15, 10)),
        ],
    )
    def test_dates(self, resolve, text, expected):
        assert resolve(text).date == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("at 3:30pm", datetime(2024, 1, 15, 15, 30)),
            ("at 5", datetime(2024, 1, 15, 5)),
            ("15:45", datetime(2024, 1, 15, 15, 45)),
            ("12am", datetime(2024, 1, 15, 0)),
            ("12pm", datetime(2024, 1, 15, 12)),
            ("midnight", datetime(2024, 1, 15, 0)),
            ("11:59:58 pm", datetime(2024, 1, 15, 23, 59, 58)),
            ("yesterday at noon", datetime(2024, 1, 14, 12)),
            ("noon tomorrow", datetime(2024, 1, 16, 12)),
            ("on friday at 5pm", datetime(2024, 1, 19, 17)),
            ("next 3pm", datetime(2024, 1, 15, 15)),
            ("last 3pm", datetime(2024, 1, 14, 15)),
            ("next 9am", datetime(2024, 1, 16, 9)),
            ("next hour", datetime(2024, 1, 15, 11)),
            ("2 hours after tomorrow at noon", datetime(2024, 1, 16, 14)),
        ],
    )
    def test_times(self, resolve, text, expected):
        assert resolve(text).date == expected

    def test_now_is_reference(self, resolve, reference):
        state = resolve("now")
        assert state.date == reference
        assert marked(state) == ALL


class TestSpecifiedFields:
    """Only constrained fields are marked."""

    @pytest.mark.parametrize(
        "text,fields",
        [
            ("3 days ago", ALL),
            ("in 2 weeks", ALL),
            ("tomorrow", DATE),
            ("friday", DATE),
            ("at 3:30pm", {"hours", "minutes"}),
            ("at 5", {"hours"}),
            ("3pm", {"hours"}),
            ("noon", {"hours", "minutes", "seconds"}),
            ("11:59:58 pm", {"hours", "minutes", "seconds"}),
            ("5th of march", {"month", "day"}),
            ("december", {"month"}),
            ("jan 5th, 2024", DATE),
            ("March 2024", {"year", "month"}),
            ("next year", {"year"}),
            ("last month", {"year", "month"}),
            ("next week", DATE),
            ("next hour", DATE | {"hours"}),
            ("next 3pm", DATE | {"hours"}),
            ("2 weeks before dec 25", DATE),
            ("tomorrow at noon", ALL),
        ],
    )
    def test_marks(self, resolve, text, fields):
        assert marked(resolve(text)) == fields

    def test_mark_unknown_field(self):
        with pytest.raises(ValueError):
            SpecifiedFields().mark("decade")

    def test_summary_properties(self):
        fields = SpecifiedFields()
        assert not fields.date and not fields.time
        fields.mark("minutes")
        assert fields.time and not fields.date
        fields.mark_all()
        assert all(fields.to_dict().values())


class TestClockReading:
    def test_twelve_hour(self):
        tree = lex("3:15 p.m.")[0].tree
        clock = read_clock(tree.child.child)
        assert clock.value == (15, 15, 0)
        assert clock.fields == ("hours", "minutes")


class TestErrors:
    def test_unknown_tag(self, reference):
        state = ExtractionState.from_reference(reference)
        with pytest.raises(GrammarError) as exc_info:
            Extractor(state).visit(ValueNode("bogus", "x", 0, 1))
        assert exc_info.value.tag == "bogus"

    def test_year_zero(self, resolve):
        with pytest.raises(ExtractionError):
            resolve("year 0 jan")

    def test_shift_out_of_range(self, resolve):
        with pytest.raises(ExtractionError):
            resolve("9999 years ago")

    def test_reference_not_mutated(self, resolve, reference):
        state = resolve("tomorrow")
        assert state.reference == reference == datetime(2024, 1, 15, 10)

    @pytest.mark.parametrize(
        "text,edge",
        [
            ("next friday", datetime(9999, 12, 31, 23)),
            ("saturday", datetime(9999, 12, 31)),
            ("friday next week", datetime(9999, 12, 31)),
            ("next 9am", datetime(9999, 12, 31, 23)),
            ("last sunday", datetime(1, 1, 1)),
        ],
    )
    def test_weekday_and_clock_out_of_range(self, text, edge):
        with pytest.raises(ExtractionError):
            extract(lex(text)[0].tree, edge)

    def test_deep_nesting(self, reference):
        text = "1 day after " * 400 + "tomorrow"
        tree = lex(text)[-1].tree
        with pytest.raises(ExtractionError):
            extract(tree, reference)
