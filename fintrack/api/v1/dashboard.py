"""
Dashboard API endpoint
"""
from datetime import date

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fintrack.api.deps import Identity, get_app_settings, get_current_identity, get_db, get_today
from fintrack.application.dashboard import MAX_SERIES_DAYS, DashboardService
from fintrack.config import Settings


router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


class DailyDataResponse(BaseModel):
    date: date
    income: float
    expense: float


class CategoryBreakdownResponse(BaseModel):
    # Insertion order = total descending
    income_by_category: dict[str, float]
    expense_by_category: dict[str, float]


class DashboardResponse(BaseModel):
    total_income: float
    total_expense: float
    balance: float
    today_income: float
    today_expense: float
    monthly_income: float
    monthly_expense: float
    daily_data: list[DailyDataResponse]
    category_breakdown: CategoryBreakdownResponse


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    days: int | None = Query(None, ge=1, le=MAX_SERIES_DAYS),
    identity: Identity = Depends(get_current_identity),
    today: date = Depends(get_today),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db),
):
    """Totals, today/month windows, daily series and category breakdown"""
    summary = DashboardService(db).summary(
        identity.user_id,
        today=today,
        days=days or settings.DASHBOARD_DAYS,
    )

    return DashboardResponse(
        total_income=float(summary.total_income),
        total_expense=float(summary.total_expense),
        balance=float(summary.balance),
        today_income=float(summary.today_income),
        today_expense=float(summary.today_expense),
        monthly_income=float(summary.monthly_income),
        monthly_expense=float(summary.monthly_expense),
        daily_data=[
            DailyDataResponse(date=d.date, income=float(d.income), expense=float(d.expense))
            for d in summary.daily_data
        ],
        category_breakdown=CategoryBreakdownResponse(
            income_by_category={name: float(v) for name, v in summary.income_by_category},
            expense_by_category={name: float(v) for name, v in summary.expense_by_category},
        ),
    )
