"""
Expense API endpoints
"""
from datetime import date, datetime

from pydantic import BaseModel, Field

from fintrack.api.v1.records import build_records_router
from fintrack.api.v1.schemas import MAX_ID
from fintrack.domain.record import RECORD_KIND_EXPENSE


class ExpenseRequest(BaseModel):
    category_id: int = Field(0, ge=0, le=MAX_ID)  # 0 = not provided
    amount: float | None = None
    description: str | None = None
    expense_date: date | None = None  # YYYY-MM-DD


class ExpenseResponse(BaseModel):
    id: int
    user_id: int
    category_id: int
    category_name: str
    amount: float
    description: str | None
    expense_date: date
    created_at: datetime
    updated_at: datetime


router = build_records_router(
    kind=RECORD_KIND_EXPENSE,
    request_model=ExpenseRequest,
    response_model=ExpenseResponse,
    date_field="expense_date",
)
