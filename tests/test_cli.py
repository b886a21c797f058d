"""Tests for the command line interface."""

import json
from datetime import date, timedelta
from decimal import Decimal

from reportit.cli.main import cli
from reportit.domain.entities import GroupByType, MetricType, ReportConfig, TimeframeType

from conftest import OWNER, OTHER_OWNER


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def test_help_does_not_require_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "run" in result.output
    assert "spending" in result.output


def test_run_report_table(cli_runner, temp_db, add_transaction, sample_categories):
    add_transaction(-42.5, category_id=sample_categories["Transport"], on=date.today())
    report_id = temp_db.create_report(OWNER, "Monthly spend")

    result = _invoke(cli_runner, temp_db, "run", report_id, "--user", OWNER)

    assert result.exit_code == 0
    assert "Monthly spend" in result.output
    assert "Last 3 Months" in result.output
    assert "Transport" in result.output
    assert "42.50" in result.output
    assert "100.00%" in result.output


def test_run_report_empty(cli_runner, temp_db):
    report_id = temp_db.create_report(OWNER, "Nothing")

    result = _invoke(cli_runner, temp_db, "run", report_id, "--user", OWNER)

    assert result.exit_code == 0
    assert "No transactions found" in result.output


def test_run_report_json_with_custom_override(cli_runner, temp_db, add_transaction):
    add_transaction(-10, on=date(2024, 1, 10))
    add_transaction(-99, on=date(2024, 2, 10))
    report_id = temp_db.create_report(OWNER, "Custom", group_by=GroupByType.NONE)

    result = _invoke(
        cli_runner, temp_db,
        "run", report_id, "--user", OWNER,
        "--timeframe", "custom", "--start-date", "2024-01-01", "--end-date", "2024-01-31",
        "--json",
    )

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["timeframe"] == {
        "startDate": "2024-01-01",
        "endDate": "2024-01-31",
        "label": "Custom Range",
    }
    assert data["data"][0]["value"] == 10.0
    assert data["summary"]["total"] == 10.0


def test_run_report_custom_without_dates_fails(cli_runner, temp_db):
    report_id = temp_db.create_report(OWNER, "Custom", timeframe_type=TimeframeType.CUSTOM)

    result = _invoke(cli_runner, temp_db, "run", report_id, "--user", OWNER)

    assert result.exit_code == 1
    assert "Custom timeframe requires start and end dates" in result.output


def test_run_missing_report(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "run", "missing", "--user", OWNER)

    assert result.exit_code == 1
    assert "Error: Report with ID missing not found" in result.output


def test_run_foreign_report(cli_runner, temp_db):
    report_id = temp_db.create_report(OTHER_OWNER, "Theirs")

    result = _invoke(cli_runner, temp_db, "run", report_id, "--user", OWNER)

    assert result.exit_code == 1
    assert "do not have access" in result.output


def test_run_requires_user(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "run", "some-id")

    assert result.exit_code == 2
    assert "--user" in result.output


def test_run_count_metric_prints_integers(cli_runner, temp_db, add_transaction):
    add_transaction(-5, on=date.today())
    add_transaction(-7, on=date.today() - timedelta(days=1))
    report_id = temp_db.create_report(
        OWNER, "Count", group_by=GroupByType.NONE, config=ReportConfig(metric=MetricType.COUNT)
    )

    result = _invoke(cli_runner, temp_db, "run", report_id, "--user", OWNER)

    assert result.exit_code == 0
    assert "Total" in result.output
    assert " 2 " in result.output


def test_spending_categories(cli_runner, temp_db, add_transaction, sample_categories):
    add_transaction(-150, category_id=sample_categories["Groceries"], on=date(2025, 1, 5))
    add_transaction(-50, category_id=sample_categories["Dining"], on=date(2025, 1, 6))

    result = _invoke(
        cli_runner, temp_db,
        "spending", "categories", "--user", OWNER, "--end-date", "2025-01-31",
    )

    assert result.exit_code == 0
    assert "Food" in result.output
    assert "200.00" in result.output
    assert "Groceries" not in result.output


def test_spending_payees(cli_runner, temp_db, add_transaction):
    add_transaction(-12, payee_name="Bakery", on=date(2025, 1, 5))

    result = _invoke(
        cli_runner, temp_db,
        "spending", "payees", "--user", OWNER,
        "--start-date", "2025-01-01", "--end-date", "2025-01-31",
    )

    assert result.exit_code == 0
    assert "Bakery" in result.output
    assert "12.00" in result.output


def test_spending_trend(cli_runner, temp_db, add_transaction, sample_categories):
    add_transaction(-10, category_id=sample_categories["Transport"], on=date(2025, 1, 5))
    add_transaction(-20, category_id=sample_categories["Dining"], on=date(2025, 2, 5))

    result = _invoke(
        cli_runner, temp_db,
        "spending", "trend", "--user", OWNER, "--end-date", "2025-02-28",
    )

    assert result.exit_code == 0
    assert "2025-01" in result.output
    assert "2025-02" in result.output
    assert result.output.count("Transport") == 2


def test_spending_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "spending", "payees", "--user", OWNER)

    assert result.exit_code == 0
    assert "No spending found" in result.output


def test_spending_invalid_date(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "spending", "categories", "--user", OWNER, "--start-date", "whenever"
    )

    assert result.exit_code == 1
    assert "Invalid start date" in result.output


def test_db_path_from_environment(cli_runner, temp_db, monkeypatch, add_transaction):
    add_transaction(-3, payee_name="Kiosk", on=date(2025, 1, 5))
    monkeypatch.setenv("REPORTIT_DB_PATH", temp_db.database_path)

    result = cli_runner.invoke(
        cli, ["spending", "payees", "--user", OWNER, "--end-date", "2025-01-31"]
    )

    assert result.exit_code == 0
    assert "Kiosk" in result.output
