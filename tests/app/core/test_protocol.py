"""Tests for protocol/phone normalization and filename helpers."""

import re

import pytest

from app.core.protocol import (
    DEFAULT_FILENAME,
    digits_only,
    resolve_display_name,
    sanitize_filename,
)

SAFE_FILENAME = re.compile(r"^[A-Za-z0-9._-]{1,100}$")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("+55 (11) 99999-0001", "5511999990001"),
        ("2024.0001/A", "20240001"),
        (20240001, "20240001"),
        ("abc", ""),
        (None, ""),
    ],
)
def test_digits_only(value, expected):
    assert digits_only(value) == expected


def test_resolve_display_name_priority():
    assert resolve_display_name("Display", "Nome", "mail@x.io") == "Display"
    assert resolve_display_name(None, "Nome", "mail@x.io") == "Nome"
    assert resolve_display_name("", "  ", "mail@x.io") == "mail@x.io"
    assert resolve_display_name(None, None, None) == ""
    assert resolve_display_name() == ""


def test_sanitize_filename_replaces_unsafe_runs():
    result = sanitize_filename("abc/:*?<>|.pdf")

    assert result == "abc_.pdf"
    assert SAFE_FILENAME.match(result)


def test_sanitize_filename_keeps_safe_characters():
    assert sanitize_filename("Proto-2024_01.v2") == "Proto-2024_01.v2"


def test_sanitize_filename_truncates():
    result = sanitize_filename("a" * 250)

    assert len(result) == 100
    assert SAFE_FILENAME.match(result)


@pytest.mark.parametrize("value", ["", None, "///", "<>:*", "   "])
def test_sanitize_filename_falls_back_to_default(value):
    assert sanitize_filename(value) == DEFAULT_FILENAME
