"""Tests for DashboardService."""
import pytest
from datetime import date, timedelta
from decimal import Decimal

from fintrack.application.dashboard import DashboardService
from fintrack.application.records import RecordService


TODAY = date(2026, 3, 15)
_D = Decimal


# ---- helpers ----

@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def add(db_session, categories, user):
    """add(kind, category_name, amount, day, user_id=None)"""

    def _add(kind, category, amount, day, user_id=None):
        return RecordService(db_session, kind).create(
            user_id=user_id or user.id,
            category_id=categories[category].id,
            amount=amount,
            record_date=day,
        )

    return _add


@pytest.fixture
def service(db_session):
    return DashboardService(db_session)


# ---- totals ----

class TestTotals:
    def test_zero_when_empty(self, service, user):
        assert service.total(user.id, "income") == _D("0")
        assert service.total(user.id, "expense") == _D("0")
        assert service.today(user.id, "expense", TODAY) == _D("0")
        assert service.monthly(user.id, "income", TODAY) == _D("0")

    def test_totals_today_and_month(self, service, user, add, make_user):
        add("income", "Salary", 3000, date(2026, 3, 1))
        add("income", "Freelance", 200, TODAY)
        add("income", "Salary", 2500, date(2026, 2, 28))
        add("expense", "Food", "12.50", TODAY)
        add("expense", "Food", "7.50", TODAY)
        add("expense", "Rent", 900, date(2026, 2, 1))
        other = make_user()
        add("expense", "Food", 1000, TODAY, user_id=other.id)

        assert service.total(user.id, "income") == _D("5700.00")
        assert service.total(user.id, "expense") == _D("920.00")
        assert service.today(user.id, "income", TODAY) == _D("200.00")
        assert service.today(user.id, "expense", TODAY) == _D("20.00")
        assert service.monthly(user.id, "income", TODAY) == _D("3200.00")
        assert service.monthly(user.id, "expense", TODAY) == _D("20.00")

    def test_month_includes_last_day(self, service, user, add):
        add("expense", "Food", 5, date(2026, 3, 31))
        add("expense", "Food", 6, date(2026, 4, 1))

        assert service.monthly(user.id, "expense", date(2026, 3, 10)) == _D("5.00")


# ---- daily series ----

class TestDailySeries:
    def test_seven_days_zero_filled(self, service, user, add):
        first_day = TODAY - timedelta(days=6)
        add("income", "Salary", 100, first_day)
        add("expense", "Food", 40, first_day)
        add("expense", "Food", 10, TODAY)
        add("expense", "Food", 15, TODAY)
        # Outside the window
        add("expense", "Food", 999, first_day - timedelta(days=1))

        series = service.daily_series(user.id, 7, TODAY)

        assert len(series) == 7
        assert [d.date for d in series] == [first_day + timedelta(days=i) for i in range(7)]
        assert series[0].income == _D("100.00")
        assert series[0].expense == _D("40.00")
        assert series[-1].income == _D("0")
        assert series[-1].expense == _D("25.00")
        for day in series[1:-1]:
            assert day.income == _D("0")
            assert day.expense == _D("0")

    def test_empty_user_still_gets_every_day(self, service, user):
        series = service.daily_series(user.id, 30, TODAY)

        assert len(series) == 30
        assert series[-1].date == TODAY
        assert all(d.income == 0 and d.expense == 0 for d in series)

    def test_invalid_length(self, service, user):
        with pytest.raises(ValueError):
            service.daily_series(user.id, 0, TODAY)


# ---- category breakdown ----

class TestCategoryBreakdown:
    def test_sorted_and_zero_excluded(self, service, user, add, make_user):
        add("expense", "Rent", 300, TODAY)
        add("expense", "Food", 60, TODAY)
        add("expense", "Food", 40, TODAY)
        # Transport has activity only for another user: total 0 for this one
        other = make_user()
        add("expense", "Transport", 500, TODAY, user_id=other.id)

        breakdown = service.category_breakdown(user.id, "expense")

        assert breakdown == [("Rent", _D("300.00")), ("Food", _D("100.00"))]

    def test_kinds_are_separate(self, service, user, add):
        add("income", "Salary", 1000, TODAY)
        add("expense", "Food", 10, TODAY)

        assert service.category_breakdown(user.id, "income") == [("Salary", _D("1000.00"))]
        assert service.category_breakdown(user.id, "expense") == [("Food", _D("10.00"))]


# ---- summary ----

class TestSummary:
    def test_balance_tracks_creates_and_deletes(self, service, user, add, db_session):
        add("income", "Salary", 1000, TODAY)
        rent = add("expense", "Rent", 400, TODAY)
        add("expense", "Food", "50.25", TODAY)

        summary = service.summary(user.id, TODAY)
        assert summary.balance == summary.total_income - summary.total_expense
        assert summary.balance == _D("549.75")

        RecordService(db_session, "expense").delete(rent.id, user.id)

        summary = service.summary(user.id, TODAY)
        assert summary.balance == summary.total_income - summary.total_expense
        assert summary.balance == _D("949.75")

    def test_summary_shape(self, service, user, add):
        add("expense", "Food", 50, TODAY)

        summary = service.summary(user.id, TODAY, days=7)

        assert summary.today_expense == _D("50.00")
        assert summary.total_expense == _D("50.00")
        assert summary.balance == _D("-50.00")
        assert len(summary.daily_data) == 7
        assert summary.expense_by_category == [("Food", _D("50.00"))]
        assert summary.income_by_category == []
