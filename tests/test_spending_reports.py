"""Tests for built-in spending reports."""

from datetime import date
from decimal import Decimal

from reportit.domain.entities import TransactionStatus

from conftest import OWNER

END = date(2025, 3, 31)


def test_spending_by_category_rolls_up_to_parent(
    temp_db, spending_service, add_transaction, sample_categories
):
    add_transaction(-150, category_id=sample_categories["Groceries"])
    add_transaction(-50, category_id=sample_categories["Dining"])
    add_transaction(-30, category_id=sample_categories["Transport"])
    add_transaction(2000, category_id=sample_categories["Salary"])

    report = spending_service.spending_by_category(OWNER, None, END)

    assert [(i.category_name, i.total) for i in report.data] == [
        ("Food", Decimal("200")),
        ("Transport", Decimal("30")),
    ]
    assert report.data[0].category_id == sample_categories["Food"]
    assert report.data[0].color == "#ff0000"
    assert report.total_spending == Decimal("230")


def test_spending_by_category_merges_uncategorized(
    temp_db, spending_service, add_transaction, eur_account
):
    temp_db.add_exchange_rate("EUR", "USD", Decimal("1.1"))
    add_transaction(-50)
    add_transaction(-100, account_id=eur_account, category_id="stale-category-id")

    report = spending_service.spending_by_category(OWNER, None, END)

    assert len(report.data) == 1
    assert report.data[0].category_id is None
    assert report.data[0].category_name == "Uncategorized"
    assert report.data[0].total == Decimal("160")


def test_spending_by_category_keeps_top_15(temp_db, spending_service, add_transaction):
    for i in range(20):
        category_id = temp_db.create_category(OWNER, f"Category {i:02d}")
        add_transaction(-(i + 1), category_id=category_id)

    report = spending_service.spending_by_category(OWNER, None, END)

    assert len(report.data) == 15
    assert report.data[0].total == Decimal("20")
    assert report.data[-1].total == Decimal("6")
    assert all(a.total >= b.total for a, b in zip(report.data, report.data[1:]))
    assert report.total_spending == Decimal(sum(range(6, 21)))


def test_spending_by_category_uses_split_allocations(
    temp_db, spending_service, add_transaction, sample_categories
):
    add_transaction(
        -100,
        splits=[
            {"amount": Decimal("-70"), "category_id": sample_categories["Transport"]},
            {"amount": Decimal("-40"), "category_id": sample_categories["Dining"]},
            {"amount": Decimal("10"), "category_id": sample_categories["Salary"]},
        ],
    )

    report = spending_service.spending_by_category(OWNER, None, END)

    assert [(i.category_name, i.total) for i in report.data] == [
        ("Transport", Decimal("70")),
        ("Food", Decimal("40")),
    ]


def test_spending_excludes_transfers_void_and_dates_outside_range(
    temp_db, spending_service, add_transaction, sample_categories
):
    transport = sample_categories["Transport"]
    add_transaction(-10, category_id=transport)
    add_transaction(-20, category_id=transport, is_transfer=True)
    add_transaction(-40, category_id=transport, status=TransactionStatus.VOID)
    add_transaction(-80, category_id=transport, on=date(2025, 4, 1))
    add_transaction(-160, category_id=transport, on=date(2024, 12, 31))

    report = spending_service.spending_by_category(OWNER, date(2025, 1, 1), END)
    all_time = spending_service.spending_by_category(OWNER, None, END)

    assert report.total_spending == Decimal("10")
    assert all_time.total_spending == Decimal("170")


def test_spending_by_payee(temp_db, spending_service, add_transaction):
    shop = temp_db.create_payee(OWNER, "Corner Shop")
    add_transaction(-10, payee_id=shop, payee_name="CORNER SHOP 1")
    add_transaction(-15, payee_id=shop)
    add_transaction(-7, payee_name="Street vendor")
    add_transaction(-3, payee_name="Street vendor")
    add_transaction(-1)
    add_transaction(500, payee_name="Employer")

    report = spending_service.spending_by_payee(OWNER, None, END)

    assert [(i.payee_id, i.payee_name, i.total) for i in report.data] == [
        (shop, "Corner Shop", Decimal("25")),
        (None, "Street vendor", Decimal("10")),
        (None, "Unknown", Decimal("1")),
    ]
    assert report.total_spending == Decimal("36")


def test_spending_by_payee_keeps_top_20(temp_db, spending_service, add_transaction):
    for i in range(25):
        add_transaction(-(i + 1), payee_name=f"Payee {i:02d}")

    report = spending_service.spending_by_payee(OWNER, None, END)

    assert len(report.data) == 20
    assert report.data[0].payee_name == "Payee 24"
    assert report.data[0].total >= report.data[1].total
    assert report.data[-1].total == Decimal("6")


def test_spending_by_payee_converts_currencies(
    temp_db, spending_service, add_transaction, eur_account
):
    temp_db.add_exchange_rate("EUR", "USD", Decimal("1.1"))
    add_transaction(-50, payee_name="Shop")
    add_transaction(-100, account_id=eur_account, payee_name="Shop")

    report = spending_service.spending_by_payee(OWNER, None, END)

    assert report.data[0].total == Decimal("160")


def test_monthly_trend_zero_fills_months(
    temp_db, spending_service, add_transaction, sample_categories
):
    add_transaction(-100, category_id=sample_categories["Groceries"], on=date(2025, 1, 10))
    add_transaction(-30, category_id=sample_categories["Transport"], on=date(2025, 2, 3))
    add_transaction(-20, category_id=sample_categories["Dining"], on=date(2025, 2, 20))

    trend = spending_service.monthly_spending_trend(OWNER, None, END)

    assert [m.month for m in trend.data] == ["2025-01", "2025-02"]
    january, february = trend.data
    assert [(c.category_name, c.total) for c in january.categories] == [
        ("Food", Decimal("100")),
        ("Transport", Decimal("0")),
    ]
    assert [(c.category_name, c.total) for c in february.categories] == [
        ("Food", Decimal("20")),
        ("Transport", Decimal("30")),
    ]
    assert january.total_spending == Decimal("100")
    assert february.total_spending == Decimal("50")


def test_monthly_trend_keeps_top_10_categories(temp_db, spending_service, add_transaction):
    for i in range(12):
        category_id = temp_db.create_category(OWNER, f"Category {i:02d}")
        add_transaction(-(i + 1), category_id=category_id, on=date(2025, 1 + i % 3, 1))

    trend = spending_service.monthly_spending_trend(OWNER, None, END)

    assert len(trend.data) == 3
    for month in trend.data:
        assert len(month.categories) == 10
        assert [c.category_name for c in month.categories] == [
            f"Category {i:02d}" for i in range(11, 1, -1)
        ]


def test_monthly_trend_empty(spending_service):
    trend = spending_service.monthly_spending_trend(OWNER, None, END)

    assert trend.data == ()
