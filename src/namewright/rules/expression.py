"""Line parser and condition combinator of the rename script language.

Grammar, one statement per line::

    // comment
    DO <action>
    IF <test>[;<test>]*[,<test>]* DO <action>

    <test>   := <letter>(<argument>)
    <action> := ADD <template> | REPLACE '<from>' '<to>' | FAIL

Tests joined with ``;`` form an AND chain and tests joined with ``,`` are OR
alternatives, but they do not follow ordinary boolean precedence. A
condition is evaluated as:

1. Evaluate the first test.
2. If any ``;`` test is present, the line holds only if the first test and
   every ``;`` test hold. A failed chain is final; ``,`` alternatives are not
   consulted.
3. Otherwise the line holds if the first test holds or, failing that, if any
   ``,`` alternative holds on its own.

Existing scripts depend on this order, so it is kept as is.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from namewright.models.requests import RenameContext
from namewright.rules.conditions import evaluate_test
from namewright.rules.tokens import Keyword

_UNCONDITIONAL = re.compile(r"^DO(?:\s+(?P<action>.*))?$", re.IGNORECASE)
_CONDITIONAL = re.compile(
    r"^IF\s+(?P<condition>.*?)(?:\s+DO(?:\s+(?P<action>.*))?)?$", re.IGNORECASE
)


class LineKind(str, Enum):
    UNCONDITIONAL = "unconditional"
    CONDITIONAL = "conditional"
    INVALID = "invalid"


class ActionKind(str, Enum):
    ADD = "ADD"
    REPLACE = "REPLACE"
    FAIL = "FAIL"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Action:
    """Action part of a line, e.g. ``ADD %eng - %enr``."""

    kind: ActionKind
    parameter: str = ""


@dataclass(frozen=True)
class ScriptLine:
    """One parsed, non-blank script line."""

    kind: LineKind
    text: str
    condition: str = ""
    action: Action = Action(ActionKind.UNKNOWN)


def parse_action(text: str) -> Action:
    """Parse the text after ``DO``.

    Unrecognized actions parse as :attr:`ActionKind.UNKNOWN` and are ignored by
    the runner.
    """
    text = text.strip()
    if Keyword.FAIL.matches(text):
        return Action(ActionKind.FAIL)
    keyword, sep, parameter = text.partition(" ")
    if not sep:
        return Action(ActionKind.UNKNOWN, text)
    if Keyword.ADD.matches(keyword):
        return Action(ActionKind.ADD, parameter)
    if Keyword.REPLACE.matches(keyword):
        return Action(ActionKind.REPLACE, parameter)
    return Action(ActionKind.UNKNOWN, text)


def strip_comment(line: str) -> str:
    """Remove a trailing ``//`` comment and surrounding whitespace."""
    text = line.strip()
    pos = text.find("//")
    if pos >= 0:
        text = text[:pos]
    return text.strip()


def parse_line(line: str) -> Optional[ScriptLine]:
    """Parse one line of a script.

    Returns:
        The parsed line, or None for blank and comment-only lines.
    """
    text = strip_comment(line)
    if not text:
        return None

    match = _UNCONDITIONAL.match(text)
    if match:
        return ScriptLine(
            kind=LineKind.UNCONDITIONAL,
            text=text,
            action=parse_action(match.group("action") or ""),
        )

    match = _CONDITIONAL.match(text)
    if match:
        return ScriptLine(
            kind=LineKind.CONDITIONAL,
            text=text,
            condition=match.group("condition").strip(),
            action=parse_action(match.group("action") or ""),
        )

    return ScriptLine(kind=LineKind.INVALID, text=text)


def parse_script(lines: List[str]) -> List[ScriptLine]:
    """Parse every non-blank line of a script, in order."""
    parsed = (parse_line(line) for line in lines)
    return [line for line in parsed if line is not None]


def _test_at(text: str) -> Optional[Tuple[str, str]]:
    """Read ``<letter>(<argument>)`` from the start of *text*."""
    text = text.strip()
    if not text:
        return None
    open_pos = text.find("(")
    close_pos = text.find(")")
    if open_pos < 0 or close_pos < open_pos:
        return None
    return text[0], text[open_pos + 1 : close_pos]


def first_test(condition: str) -> Optional[Tuple[str, str]]:
    return _test_at(condition)


def iter_tests(condition: str, separator: str) -> Iterator[Optional[Tuple[str, str]]]:
    """Yield the tests that follow each *separator* after the first test.

    Malformed tests are yielded as None.
    """
    start = condition.find("(")
    if start < 0:
        return
    pos = condition.find(separator, start)
    while pos >= 0:
        yield _test_at(condition[pos + 1 :])
        pos = condition.find(separator, pos + 1)


def _evaluate(test: Optional[Tuple[str, str]], context: RenameContext) -> bool:
    if test is None:
        return False
    letter, argument = test
    return evaluate_test(letter, argument, context)


def condition_holds(line: ScriptLine, context: RenameContext) -> bool:
    """Decide whether a line's action should run for *context*."""
    if line.kind == LineKind.UNCONDITIONAL:
        return True
    if line.kind != LineKind.CONDITIONAL:
        return False

    first = first_test(line.condition)
    if first is None:
        return False
    passed = _evaluate(first, context)

    for test in iter_tests(line.condition, ";"):
        if not passed or not _evaluate(test, context):
            return False

    if passed:
        return True

    return any(_evaluate(test, context) for test in iter_tests(line.condition, ","))
