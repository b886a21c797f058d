"""Tests for currency conversion and normalization."""

import logging
from datetime import date
from decimal import Decimal

import pytest

from reportit.domain.currency import (
    CurrencyNormalizer,
    ReportCurrencyService,
    build_rate_map,
    convert_amount,
    has_rate,
)
from reportit.domain.entities import ExchangeRate, LedgerEntry
from reportit.domain.expansion import SimpleUnit

from conftest import OWNER


def _unit(amount, currency_code):
    return SimpleUnit(
        entry=LedgerEntry(
            id="t1",
            owner_id=OWNER,
            account_id="a1",
            date=date(2025, 3, 1),
            amount=Decimal(amount),
            currency_code=currency_code,
        )
    )


def test_same_currency_passes_through():
    assert convert_amount(Decimal("42.5"), "USD", "USD", {}) == Decimal("42.5")


def test_direct_rate_multiplies():
    rate_map = {("EUR", "USD"): Decimal("1.1")}

    assert convert_amount(Decimal("100"), "EUR", "USD", rate_map) == Decimal("110.0")


def test_inverse_rate_divides():
    rate_map = {("USD", "CAD"): Decimal("1.36")}

    assert convert_amount(Decimal("136"), "CAD", "USD", rate_map) == Decimal("100")


def test_direct_rate_wins_over_inverse():
    rate_map = {("EUR", "USD"): Decimal("1.1"), ("USD", "EUR"): Decimal("0.5")}

    assert convert_amount(Decimal("10"), "EUR", "USD", rate_map) == Decimal("11.0")


def test_missing_rate_passes_through():
    assert convert_amount(Decimal("10"), "JPY", "USD", {}) == Decimal("10")


def test_zero_rates_are_unusable():
    rate_map = {("USD", "GBP"): Decimal("0")}

    assert convert_amount(Decimal("10"), "GBP", "USD", rate_map) == Decimal("10")
    assert not has_rate("GBP", "USD", rate_map)


def test_empty_source_currency_passes_through():
    assert convert_amount(Decimal("10"), "", "USD", {("", "USD"): Decimal("2")}) == Decimal("10")


def test_build_rate_map_indexes_by_pair():
    rates = [
        ExchangeRate("EUR", "USD", Decimal("1.1")),
        ExchangeRate("USD", "CAD", Decimal("1.36")),
    ]

    assert build_rate_map(rates) == {
        ("EUR", "USD"): Decimal("1.1"),
        ("USD", "CAD"): Decimal("1.36"),
    }


def test_normalizer_returns_absolute_converted_amount():
    normalizer = CurrencyNormalizer("USD", {("EUR", "USD"): Decimal("1.1")})

    assert normalizer.normalize(_unit("-100", "EUR")) == Decimal("110.0")
    assert normalizer.normalize(_unit("-50", "USD")) == Decimal("50")


def test_normalizer_warns_once_per_missing_pair(caplog):
    normalizer = CurrencyNormalizer("USD")

    with caplog.at_level(logging.WARNING, logger="reportit"):
        normalizer.convert(Decimal("1"), "JPY")
        normalizer.convert(Decimal("2"), "JPY")
        normalizer.convert(Decimal("3"), "USD")

    warnings = [r for r in caplog.records if "No exchange rate" in r.getMessage()]
    assert len(warnings) == 1
    assert "JPY->USD" in warnings[0].getMessage()


def test_default_currency_falls_back_to_usd(temp_db):
    service = ReportCurrencyService(temp_db)

    assert service.get_default_currency(OWNER) == "USD"

    temp_db.set_default_currency(OWNER, "EUR")
    assert service.get_default_currency(OWNER) == "EUR"

    temp_db.set_default_currency(OWNER, "CAD")
    assert service.get_default_currency(OWNER) == "CAD"


def test_latest_exchange_rate_wins(temp_db):
    temp_db.add_exchange_rate("EUR", "USD", Decimal("1.05"), date(2025, 1, 1))
    temp_db.add_exchange_rate("EUR", "USD", Decimal("1.10"), date(2025, 3, 1))
    temp_db.add_exchange_rate("EUR", "USD", Decimal("1.00"), date(2024, 6, 1))

    rate_map = ReportCurrencyService(temp_db).build_rate_map()

    assert rate_map == {("EUR", "USD"): Decimal("1.10")}


def test_normalizer_for_skips_rate_lookup_for_single_currency(temp_db, monkeypatch):
    service = ReportCurrencyService(temp_db)
    temp_db.add_exchange_rate("EUR", "USD", Decimal("1.1"))

    def fail():
        raise AssertionError("rates should not be loaded")

    monkeypatch.setattr(temp_db, "get_latest_exchange_rates", fail)

    normalizer = service.normalizer_for(OWNER, [_unit("-5", "USD")])

    assert normalizer.target_currency == "USD"
    assert normalizer.rate_map == {}


def test_normalizer_for_loads_rates_for_foreign_units(temp_db):
    temp_db.add_exchange_rate("EUR", "USD", Decimal("1.1"))

    normalizer = ReportCurrencyService(temp_db).normalizer_for(
        OWNER, [_unit("-5", "USD"), _unit("-100", "EUR")]
    )

    assert normalizer.normalize(_unit("-100", "EUR")) == Decimal("110")
