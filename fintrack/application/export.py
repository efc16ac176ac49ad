"""
Export service: income/expense report for a date range.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from fintrack.domain.errors import ValidationError
from fintrack.domain.record import RECORD_KIND_EXPENSE, RECORD_KIND_INCOME, RecordFilter
from fintrack.infrastructure.repositories.records import RecordRepository
from fintrack.utils.dates import one_month_before

_ZERO = Decimal("0.00")


@dataclass
class ReportRow:
    date: date
    category_name: str
    amount: Decimal
    description: str


@dataclass
class ExportReport:
    start_date: date
    end_date: date
    income: list[ReportRow] = field(default_factory=list)
    expense: list[ReportRow] = field(default_factory=list)

    @property
    def total_income(self) -> Decimal:
        return sum((r.amount for r in self.income), _ZERO)

    @property
    def total_expense(self) -> Decimal:
        return sum((r.amount for r in self.expense), _ZERO)

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense


def resolve_period(
    start_date: date | None,
    end_date: date | None,
    today: date,
) -> tuple[date, date]:
    """
    Default period: one month ago .. today

    Raises:
        ValidationError: start after end
    """
    end = end_date or today
    start = start_date or one_month_before(today)
    if start > end:
        raise ValidationError("start_date must not be after end_date")
    return start, end


class ExportService:
    """Gather a user's records for a report"""

    def __init__(self, db: Session):
        self.db = db

    def build_report(self, user_id: int, start_date: date, end_date: date) -> ExportReport:
        period = RecordFilter(start_date=start_date, end_date=end_date)
        return ExportReport(
            start_date=start_date,
            end_date=end_date,
            income=self._rows(RECORD_KIND_INCOME, user_id, period),
            expense=self._rows(RECORD_KIND_EXPENSE, user_id, period),
        )

    def _rows(self, kind: str, user_id: int, period: RecordFilter) -> list[ReportRow]:
        repo = RecordRepository(self.db, kind)
        return [
            ReportRow(
                date=getattr(record, repo.date_field),
                category_name=record.category.name,
                amount=record.amount,
                description=record.description or "",
            )
            for record in repo.list_for_user(user_id, period)
        ]
