"""Tests for filename sanitizing."""

import pytest

from namewright.utils.sanitize import replace_invalid_folder_name_characters


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Plain Title", "Plain Title"),
        ('a*b|c\\d/e:f"g>h<i?j', "a★b¦c⧹d⁄e։f″g›h‹i？j"),
        ("Wait...", "Wait…"),
        ("  padded  ", "padded"),
        ("line\tbreak\n", "linebreak"),
        (".hidden", "․hidden"),
        ("Vol. 2.", "Vol. 2․"),
    ],
)
def test_replacements(raw: str, expected: str) -> None:
    assert replace_invalid_folder_name_characters(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["What?: A Story...", " .dots. ", "a/b\\c", "x . ", "", "...", "Name`s <Best>"],
)
def test_idempotent(raw: str) -> None:
    """Sanitizing an already sanitized name returns it unchanged."""
    once = replace_invalid_folder_name_characters(raw)
    assert replace_invalid_folder_name_characters(once) == once
