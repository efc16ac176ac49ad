"""
Income / expense repository

Both record kinds have the same shape; one repository class serves both,
parametrized by kind. Every query is scoped by the owning user.
"""
from datetime import date
from decimal import Decimal

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from fintrack.domain.errors import NotFoundOrUnauthorized
from fintrack.domain.record import RecordFilter
from fintrack.infrastructure.db.models import Category, RECORD_MODELS
from fintrack.utils.money import to_decimal


class RecordRepository:

    def __init__(self, db: Session, kind: str):
        if kind not in RECORD_MODELS:
            raise ValueError(f"Unknown record kind: {kind}")
        self.db = db
        self.kind = kind
        self.model, self.date_field = RECORD_MODELS[kind]
        self.date_column = getattr(self.model, self.date_field)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(
        self,
        user_id: int,
        category_id: int,
        amount: Decimal,
        description: str | None,
        record_date: date,
    ):
        record = self.model(
            user_id=user_id,
            category_id=category_id,
            amount=amount,
            description=description,
            **{self.date_field: record_date},
        )
        self.db.add(record)
        self.db.flush()
        self.db.refresh(record)
        return record

    def get_by_id(self, record_id: int, user_id: int):
        return (
            self.db.query(self.model)
            .filter(self.model.id == record_id, self.model.user_id == user_id)
            .first()
        )

    def list_for_user(self, user_id: int, filters: RecordFilter | None = None) -> list:
        """Records newest date first, ties by newest created"""
        query = self.db.query(self.model).filter(self.model.user_id == user_id)
        query = self._apply_filters(query, filters)
        return query.order_by(
            self.date_column.desc(),
            self.model.created_at.desc(),
            self.model.id.desc(),
        ).all()

    def update(
        self,
        record_id: int,
        user_id: int,
        category_id: int,
        amount: Decimal,
        description: str | None,
        record_date: date,
    ) -> None:
        """
        Owner-scoped update; user_id is never changed

        Raises:
            NotFoundOrUnauthorized: no row with this id belongs to user_id
        """
        rows = (
            self.db.query(self.model)
            .filter(self.model.id == record_id, self.model.user_id == user_id)
            .update(
                {
                    self.model.category_id: category_id,
                    self.model.amount: amount,
                    self.model.description: description,
                    self.date_column: record_date,
                },
                synchronize_session=False,
            )
        )
        if rows == 0:
            raise NotFoundOrUnauthorized(self.kind)

    def delete(self, record_id: int, user_id: int) -> None:
        """
        Raises:
            NotFoundOrUnauthorized: no row with this id belongs to user_id
        """
        rows = (
            self.db.query(self.model)
            .filter(self.model.id == record_id, self.model.user_id == user_id)
            .delete(synchronize_session=False)
        )
        if rows == 0:
            raise NotFoundOrUnauthorized(self.kind)

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def total(self, user_id: int, filters: RecordFilter | None = None) -> Decimal:
        """Sum of amounts (0 when nothing matches)"""
        query = self.db.query(func.coalesce(func.sum(self.model.amount), 0)).filter(
            self.model.user_id == user_id
        )
        query = self._apply_filters(query, filters)
        return to_decimal(query.scalar())

    def sum_by_date(self, user_id: int, start: date, end: date) -> dict[date, Decimal]:
        """Per-day sums for days in [start, end] that have records"""
        rows = (
            self.db.query(self.date_column, func.sum(self.model.amount))
            .filter(
                self.model.user_id == user_id,
                self.date_column >= start,
                self.date_column <= end,
            )
            .group_by(self.date_column)
            .all()
        )
        return {day: to_decimal(total) for day, total in rows}

    def sum_by_category(self, user_id: int) -> list[tuple[str, Decimal]]:
        """
        (category name, total) for categories of this kind with a non-zero total,
        largest first
        """
        total = func.coalesce(func.sum(self.model.amount), 0)
        rows = (
            self.db.query(Category.name, total)
            .outerjoin(
                self.model,
                and_(
                    self.model.category_id == Category.id,
                    self.model.user_id == user_id,
                ),
            )
            .filter(Category.type == self.kind)
            .group_by(Category.id, Category.name)
            .having(total > 0)
            .order_by(total.desc(), Category.name)
            .all()
        )
        return [(name, to_decimal(value)) for name, value in rows]

    def _apply_filters(self, query, filters: RecordFilter | None):
        if filters is None or filters.is_empty():
            return query
        if filters.category_id is not None:
            query = query.filter(self.model.category_id == filters.category_id)
        if filters.date is not None:
            query = query.filter(self.date_column == filters.date)
        if filters.start_date is not None:
            query = query.filter(self.date_column >= filters.start_date)
        if filters.end_date is not None:
            query = query.filter(self.date_column <= filters.end_date)
        return query
