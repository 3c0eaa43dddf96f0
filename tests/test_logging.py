"""Tests for GitHub Actions log formatting."""

import logging

import pytest

from labelbump.logging import NOTICE, GHAFilter, GHAFormatter, escape_command_data


def render(level, message):
    """Run a record through the filter and formatter."""
    record = logging.LogRecord("labelbump", level, __file__, 1, message, None, None)
    GHAFilter().filter(record)
    return GHAFormatter("%(message)s").format(record)


@pytest.mark.parametrize(
    "message,expected",
    [
        ("plain", "plain"),
        ("100% done", "100%25 done"),
        ('[\n  "abc"\n]', '[%0A  "abc"%0A]'),
        ("a\r\nb", "a%0D%0Ab"),
    ],
)
def test_escape_command_data(message, expected):
    """Workflow command data is percent-escaped."""
    assert escape_command_data(message) == expected


@pytest.mark.parametrize(
    "level,expected",
    [
        (logging.DEBUG, "::debug::one%0Atwo"),
        (NOTICE, "::notice::one%0Atwo"),
        (logging.WARNING, "::warning::one%0Atwo"),
        (logging.ERROR, "::error::one%0Atwo"),
        (logging.INFO, "one\ntwo"),
    ],
)
def test_multiline_records(level, expected):
    """Prefixed records stay on one line; plain INFO output is untouched."""
    assert render(level, "one\ntwo") == expected
