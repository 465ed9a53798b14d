"""Tests for the script line parser and condition combinator.

This test suite covers:
- Parsing of unconditional, conditional, comment and invalid lines
- Action parsing, including case-insensitive keywords
- The AND (;) / OR (,) evaluation order and its short-circuiting
"""

from typing import List, Tuple

import pytest

from namewright.rules import expression
from namewright.rules.expression import (
    ActionKind,
    LineKind,
    condition_holds,
    iter_tests,
    parse_line,
    parse_script,
)
from tests.helpers.factories import make_context


class TestParseLine:
    """Tests for parse_line."""

    @pytest.mark.parametrize("line", ["", "   ", "// just a comment", "  // indented"])
    def test_blank_and_comment_lines(self, line: str) -> None:
        assert parse_line(line) is None

    def test_unconditional_add(self) -> None:
        line = parse_line("DO ADD [%grp] %ann")
        assert line is not None
        assert line.kind == LineKind.UNCONDITIONAL
        assert line.action.kind == ActionKind.ADD
        assert line.action.parameter == "[%grp] %ann"

    def test_conditional_add(self) -> None:
        line = parse_line("IF A(42);F(2),G(3) DO ADD %enr")
        assert line is not None
        assert line.kind == LineKind.CONDITIONAL
        assert line.condition == "A(42);F(2),G(3)"
        assert line.action.kind == ActionKind.ADD
        assert line.action.parameter == "%enr"

    def test_keywords_are_case_insensitive(self) -> None:
        line = parse_line("if a(42) do add %ann")
        assert line is not None
        assert line.kind == LineKind.CONDITIONAL
        assert line.action.kind == ActionKind.ADD

    def test_trailing_comment_is_stripped(self) -> None:
        line = parse_line("DO ADD %ann // the show")
        assert line is not None
        assert line.action.parameter == "%ann"

    def test_fail_and_replace(self) -> None:
        fail = parse_line("IF A(42) DO FAIL")
        replace = parse_line("DO REPLACE 'a' 'b'")
        assert fail is not None and fail.action.kind == ActionKind.FAIL
        assert replace is not None
        assert replace.action.kind == ActionKind.REPLACE
        assert replace.action.parameter == "'a' 'b'"

    def test_unknown_action(self) -> None:
        line = parse_line("DO JUMP somewhere")
        assert line is not None
        assert line.kind == LineKind.UNCONDITIONAL
        assert line.action.kind == ActionKind.UNKNOWN

    def test_invalid_line(self) -> None:
        line = parse_line("ADD %ann")
        assert line is not None
        assert line.kind == LineKind.INVALID

    def test_parse_script_drops_blank_lines(self) -> None:
        lines = parse_script(["// header", "", "DO ADD a", "IF A(1) DO ADD b"])
        assert [line.kind for line in lines] == [
            LineKind.UNCONDITIONAL,
            LineKind.CONDITIONAL,
        ]


class TestIterTests:
    """Tests for iter_tests."""

    def test_semicolon_tests(self) -> None:
        assert list(iter_tests("A(1);F(2);G(3)", ";")) == [("F", "2"), ("G", "3")]

    def test_comma_tests(self) -> None:
        assert list(iter_tests("A(1),F(2)", ",")) == [("F", "2")]

    def test_malformed_test(self) -> None:
        assert list(iter_tests("A(1);junk", ";")) == [None]


def _holds(text: str) -> bool:
    line = parse_line(text)
    assert line is not None
    return condition_holds(line, make_context())


class TestConditionHolds:
    """Tests for condition_holds against the default context (show 42, version 2)."""

    def test_unconditional(self) -> None:
        assert _holds("DO ADD x") is True

    def test_invalid_never_holds(self) -> None:
        assert _holds("ADD x") is False

    def test_single_test(self) -> None:
        assert _holds("IF A(42) DO ADD x") is True
        assert _holds("IF A(7) DO ADD x") is False

    def test_and_chain(self) -> None:
        assert _holds("IF A(42);F(2) DO ADD x") is True
        assert _holds("IF A(42);F(3) DO ADD x") is False

    def test_or_alternatives(self) -> None:
        assert _holds("IF A(7),A(42) DO ADD x") is True
        assert _holds("IF A(42),A(7) DO ADD x") is True
        assert _holds("IF A(7),A(8) DO ADD x") is False

    def test_failed_and_chain_ignores_alternatives(self) -> None:
        """Test mixing ; and , on one line.

        Scenario:
        - The first test fails and a ; test is present.
        - The line does not hold even though a , alternative would.
        """
        assert _holds("IF A(7);F(2),A(42) DO ADD x") is False

    def test_malformed_first_test(self) -> None:
        assert _holds("IF junk DO ADD x") is False

    def test_and_chain_short_circuits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Tests after a failed first test are never evaluated."""
        calls: List[Tuple[str, str]] = []

        def record(letter, argument, context):
            calls.append((letter, argument))
            return False

        monkeypatch.setattr(expression, "evaluate_test", record)
        assert _holds("IF A(7);F(2);G(3) DO ADD x") is False
        assert calls == [("A", "7")]
