"""Tests for the exit code constants and the exceptions that carry them."""

from __future__ import annotations

import click

from sweep.exit_codes import (
    DESCRIPTIONS,
    EXIT_CONFIG,
    EXIT_ERROR,
    EXIT_GATE_FAILURE,
    EXIT_SUCCESS,
    EXIT_USAGE,
    ConfigError,
    GateFailureError,
    SweepError,
)


def test_codes_are_distinct_and_described():
    codes = [EXIT_SUCCESS, EXIT_ERROR, EXIT_USAGE, EXIT_CONFIG, EXIT_GATE_FAILURE]
    assert len(set(codes)) == len(codes)
    assert set(DESCRIPTIONS) == set(codes)


def test_exceptions_are_click_exceptions():
    assert issubclass(SweepError, click.ClickException)
    assert ConfigError("bad").exit_code == 3
    assert GateFailureError().exit_code == 5
    assert SweepError("boom").exit_code == 1


def test_message_has_no_prefix():
    assert ConfigError("Unknown category: x").format_message() == "Unknown category: x"
