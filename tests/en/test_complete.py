"""Tests for completing partially specified dates."""

from datetime import datetime

import pytest

from humane_dates import parse
from humane_dates.configuration import SuggestionSettings
from humane_dates.en.complete import complete_date, render
from humane_dates.en.extract import SpecifiedFields


@pytest.fixture
def first(reference):
    def _first(text):
        return parse(text, reference)[0]

    return _first


class TestRender:
    def test_full(self):
        fields = SpecifiedFields()
        fields.mark_all()
        assert render(datetime(2024, 3, 5, 0, 7, 9), fields) == "on Mar 5 2024 at 12:07:09 am"

    def test_month_and_hour_only(self):
        fields = SpecifiedFields(month=True, hours=True)
        assert render(datetime(2024, 3, 5, 13, 45), fields) == "on Mar at 1:00 pm"

    def test_nothing(self):
        assert render(datetime(2024, 3, 5), SpecifiedFields()) == ""


class TestCompleteDate:
    """Reference is Monday 2024-01-15 10:00."""

    def test_year_after_month_and_day(self, first):
        options = complete_date(first("dec 25"))
        assert options == [f"on Dec 25 {year}" for year in range(2019, 2029)]

    def test_month_after_year(self, first):
        options = complete_date(first("next year"))
        assert len(options) == 12
        assert options[0] == "on Jan 2025"
        assert options[-1] == "on Dec 2025"

    def test_day_after_month(self, first):
        options = complete_date(first("next month"))
        assert options[0] == "on Feb 1 2024"
        assert options[-1] == "on Feb 29 2024"
        assert len(options) == 29

    def test_hours_after_date(self, first):
        options = complete_date(first("tomorrow"))
        assert len(options) == 24
        assert options[0] == "on Jan 16 2024 at 12:00 am"
        assert options[15] == "on Jan 16 2024 at 3:00 pm"

    def test_minutes_after_hour(self, first):
        options = complete_date(first("at 3pm"))
        assert len(options) == 12
        assert options[0] == "at 3:00 pm"
        assert options[-1] == "at 3:55 pm"

    def test_fully_specified(self, first):
        assert complete_date(first("3 days ago")) == ["on Jan 12 2024 at 10:00:00 am"]

    def test_settings(self, first):
        settings = SuggestionSettings(minutes_interval=15, year_range=1)
        assert complete_date(first("at 3pm"), settings) == [
            "at 3:00 pm",
            "at 3:15 pm",
            "at 3:30 pm",
            "at 3:45 pm",
        ]
        assert complete_date(first("dec 25"), settings) == ["on Dec 25 2023", "on Dec 25 2024"]

    def test_result_not_mutated(self, first):
        result = first("dec 25")
        complete_date(result)
        assert result.specified.year is False

    @pytest.mark.parametrize("text", ["dec 25", "tomorrow", "at 3pm", "next year"])
    def test_options_parse_back(self, first, reference, text):
        """Each rendered option reads back to a single expression."""
        for option in complete_date(first(text))[:3]:
            results = parse(option, reference)
            assert len(results) == 1
            assert results[0].text == option

    @pytest.mark.parametrize(
        "edge,first_option,last_option",
        [
            (datetime(3, 1, 1), "on Jan 1", "on Jan 7"),
            (datetime(9998, 6, 1), "on Jan 9993", "on Jan 9999"),
        ],
    )
    def test_year_window_stays_in_range(self, edge, first_option, last_option):
        options = complete_date(parse("jan", edge)[0])
        assert len(options) == 7
        assert options[0] == first_option
        assert options[-1] == last_option
