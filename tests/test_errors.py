"""Tests for the exception hierarchy."""

import pytest

from clytia.errors import (
    Cancelled,
    ClytiaError,
    NoOptionsError,
    NonOptionalInputError,
    ParseError,
    TerminalError,
    ValidationExhausted,
)


@pytest.mark.parametrize(
    "error",
    [
        Cancelled(),
        NonOptionalInputError(),
        ParseError("abc"),
        ValidationExhausted("too short", 3),
        NoOptionsError(),
        TerminalError("broken pipe"),
    ],
)
def test_all_errors_are_clytia_errors(error):
    assert isinstance(error, ClytiaError)


def test_parse_error_keeps_text():
    error = ParseError("abc")
    assert error.text == "abc"
    assert "abc" in str(error)


def test_validation_exhausted_attributes():
    error = ValidationExhausted("too short", 3)
    assert error.reason == "too short"
    assert error.attempts == 3
    assert "3 attempts" in str(error)
