"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from reportit.cli.date_filters import parse_cli_date, resolve_cli_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_parses_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-02",
        end_date="2024-01-05",
    )

    assert start == date(2024, 1, 2)
    assert end == date(2024, 1, 5)


def test_resolve_cli_date_range_allows_missing_dates():
    assert resolve_cli_date_range(_ctx(), start_date=None, end_date="") == (None, None)


def test_resolve_cli_date_range_rejects_reversed_range(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), start_date="2024-02-01", end_date="2024-01-01")

    assert excinfo.value.exit_code == 1
    assert "Start date must not be after end date" in capsys.readouterr().err


def test_parse_cli_date_rejects_garbage(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        parse_cli_date(_ctx(), "someday", "start date")

    assert excinfo.value.exit_code == 1
    assert "Invalid start date" in capsys.readouterr().err
