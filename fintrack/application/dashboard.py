"""
Dashboard: aggregated income/expense summary for one user.

Pure read-layer: no mutations, nothing cached between calls.
Blocks:
  1. Totals (all time), today, current month
  2. Daily series for the last N days (gap-filled)
  3. Category breakdown per kind
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from fintrack.domain.record import RECORD_KIND_EXPENSE, RECORD_KIND_INCOME, RecordFilter
from fintrack.infrastructure.repositories.records import RecordRepository
from fintrack.utils.dates import date_window, month_bounds
from fintrack.utils.money import to_decimal

DEFAULT_SERIES_DAYS = 30
MAX_SERIES_DAYS = 365

_ZERO = Decimal("0.00")


@dataclass
class DailyTotals:
    date: date
    income: Decimal = _ZERO
    expense: Decimal = _ZERO


@dataclass
class DashboardSummary:
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    today_income: Decimal
    today_expense: Decimal
    monthly_income: Decimal
    monthly_expense: Decimal
    daily_data: list[DailyTotals] = field(default_factory=list)
    income_by_category: list[tuple[str, Decimal]] = field(default_factory=list)
    expense_by_category: list[tuple[str, Decimal]] = field(default_factory=list)


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self._repos = {
            RECORD_KIND_INCOME: RecordRepository(db, RECORD_KIND_INCOME),
            RECORD_KIND_EXPENSE: RecordRepository(db, RECORD_KIND_EXPENSE),
        }

    # ------------------------------------------------------------------
    # Sums
    # ------------------------------------------------------------------

    def total(self, user_id: int, kind: str) -> Decimal:
        return self._repos[kind].total(user_id)

    def today(self, user_id: int, kind: str, today: date) -> Decimal:
        return self._repos[kind].total(user_id, RecordFilter(date=today))

    def monthly(self, user_id: int, kind: str, today: date) -> Decimal:
        first, last = month_bounds(today)
        return self._repos[kind].total(
            user_id, RecordFilter(start_date=first, end_date=last)
        )

    # ------------------------------------------------------------------
    # Series / breakdown
    # ------------------------------------------------------------------

    def daily_series(self, user_id: int, days: int, today: date) -> list[DailyTotals]:
        """
        Exactly `days` entries covering [today - (days-1), today], ascending.

        The calendar is enumerated here and each day is looked up in the grouped
        sums, so days without records appear with zeros.
        """
        if days < 1:
            raise ValueError("days must be positive")

        window = date_window(today, days)
        start, end = window[0], window[-1]

        income = self._repos[RECORD_KIND_INCOME].sum_by_date(user_id, start, end)
        expense = self._repos[RECORD_KIND_EXPENSE].sum_by_date(user_id, start, end)

        return [
            DailyTotals(
                date=day,
                income=income.get(day, _ZERO),
                expense=expense.get(day, _ZERO),
            )
            for day in window
        ]

    def category_breakdown(self, user_id: int, kind: str) -> list[tuple[str, Decimal]]:
        """(category name, total) with zero totals excluded, largest first"""
        return self._repos[kind].sum_by_category(user_id)

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def summary(
        self,
        user_id: int,
        today: date,
        days: int = DEFAULT_SERIES_DAYS,
    ) -> DashboardSummary:
        """
        Build the full dashboard. Reads are independent statements (no snapshot);
        any failing query propagates and no partial summary is returned.
        """
        total_income = self.total(user_id, RECORD_KIND_INCOME)
        total_expense = self.total(user_id, RECORD_KIND_EXPENSE)

        return DashboardSummary(
            total_income=total_income,
            total_expense=total_expense,
            balance=to_decimal(total_income - total_expense),
            today_income=self.today(user_id, RECORD_KIND_INCOME, today),
            today_expense=self.today(user_id, RECORD_KIND_EXPENSE, today),
            monthly_income=self.monthly(user_id, RECORD_KIND_INCOME, today),
            monthly_expense=self.monthly(user_id, RECORD_KIND_EXPENSE, today),
            daily_data=self.daily_series(user_id, days, today),
            income_by_category=self.category_breakdown(user_id, RECORD_KIND_INCOME),
            expense_by_category=self.category_breakdown(user_id, RECORD_KIND_EXPENSE),
        )
