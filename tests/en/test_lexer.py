"""Tests for the categorizing driver."""

import logging

import pytest

from humane_dates.core.matcher import literal, sequence, tag
from humane_dates.core.tokenizer import tokenize as core_tokenize
from humane_dates.en.lexer import categorize, lex
from humane_dates.en.tokenizer import tokenize

SENTENCES = [
    "",
    "nothing to see here",
    "lunch tomorrow at noon and dinner on friday at 7pm",
    "ping me in 2 hours, or 3 days ago?? next friday!!",
    "at at at 3:30pm 3:30pm",
    "!!!",
    "12/25/2024 2024-01-01 jan 5th, 2024",
]


class TestCategorize:
    def test_finds_each_expression(self):
        text = "lunch tomorrow at noon and dinner on friday at 7pm"
        matches = lex(text)
        assert [text[m.start:m.end] for m in matches] == [
            "tomorrow at noon",
            "on friday at 7pm",
        ]

    @pytest.mark.parametrize("text", SENTENCES)
    def test_progress_and_no_overlap(self, text):
        """Matches advance through the token stream and never overlap."""
        matches = lex(text)
        previous_end = 0
        for match in matches:
            assert match.token_end > match.token_start >= previous_end
            assert match.start < match.end
            previous_end = match.token_end

    @pytest.mark.parametrize("text", SENTENCES)
    def test_spans_match_tokens(self, text):
        tokens = tokenize(text)
        for match in lex(text):
            assert match.start == tokens[match.token_start].start
            assert match.end == tokens[match.token_end - 1].end

    def test_custom_grammar(self):
        """The driver works with any top rule."""
        grammar = sequence("pair", [tag("word", "ident"), literal("bang", "!")])
        matches = categorize(core_tokenize("hi! there ok!"), grammar=grammar)
        assert [(m.start, m.end) for m in matches] == [(0, 3), (10, 13)]

    def test_step_limit_is_a_non_match(self, caplog):
        with caplog.at_level(logging.WARNING, logger="humane_dates.en.lexer"):
            assert lex("tomorrow", max_steps=1) == []
        assert "step budget" in caplog.text

    def test_generous_step_limit(self):
        assert len(lex("tomorrow at noon", max_steps=10_000)) == 1

    def test_to_dict(self):
        match = lex("next friday")[0]
        data = match.to_dict()
        assert data["start"] == 0
        assert data["end"] == 11
        assert data["tree"]["tag"] == "date-time"
        assert match.span == (0, 11)

    def test_deep_nesting_is_a_non_match(self, caplog):
        """Nesting beyond the interpreter's stack is skipped, not raised."""
        text = "1 day after " * 400 + "tomorrow"
        with caplog.at_level(logging.WARNING, logger="humane_dates.en.lexer"):
            matches = lex(text)
        assert "nested too deeply" in caplog.text
        assert len(matches) == 1
        assert matches[0].end == len(text)

    def test_sentence_period_left_out(self):
        text = "See you tomorrow."
        assert lex(text)[0].span == (8, 16)

    def test_abbreviation_period_kept(self):
        text = "call at 3 p.m."
        match = lex(text)[0]
        assert text[match.start:match.end] == "at 3 p.m."
