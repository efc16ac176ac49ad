"""
Income / expense use cases - validation and owner-scoped mutations
"""
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from fintrack.domain.category import CategoryCheck
from fintrack.domain.errors import InvalidCategoryError, NotFoundOrUnauthorized, ValidationError
from fintrack.domain.record import RecordFilter, normalize_description, validate_amount
from fintrack.infrastructure.repositories.categories import CategoryRepository
from fintrack.infrastructure.repositories.records import RecordRepository


class RecordService:
    """
    Income or expense operations for one authenticated user

    The kind ("income" / "expense") selects the table and the category type
    a record must reference.
    """

    def __init__(self, db: Session, kind: str):
        self.db = db
        self.kind = kind
        self.records = RecordRepository(db, kind)
        self.categories = CategoryRepository(db)

    def create(
        self,
        user_id: int,
        category_id: int,
        amount,
        record_date: date,
        description: str | None = None,
    ):
        """
        Create a record owned by user_id

        Raises:
            ValidationError: bad amount/description/date
            InvalidCategoryError: category missing or of the other kind
        """
        values = self._validate(category_id, amount, record_date, description)
        record = self.records.create(user_id=user_id, **values)
        self.db.commit()
        return record

    def get(self, record_id: int, user_id: int):
        record = self.records.get_by_id(record_id, user_id)
        if record is None:
            raise NotFoundOrUnauthorized(self.kind)
        return record

    def list_records(self, user_id: int, filters: RecordFilter | None = None) -> list:
        if filters and filters.start_date and filters.end_date and filters.start_date > filters.end_date:
            raise ValidationError("start_date must not be after end_date")
        return self.records.list_for_user(user_id, filters)

    def update(
        self,
        record_id: int,
        user_id: int,
        category_id: int,
        amount,
        record_date: date,
        description: str | None = None,
    ):
        """
        Replace a record's fields; ownership never changes

        Raises:
            ValidationError / InvalidCategoryError: as for create
            NotFoundOrUnauthorized: record absent or owned by another user
        """
        values = self._validate(category_id, amount, record_date, description)
        self.records.update(record_id=record_id, user_id=user_id, **values)
        self.db.commit()
        return self.get(record_id, user_id)

    def delete(self, record_id: int, user_id: int) -> None:
        self.records.delete(record_id, user_id)
        self.db.commit()

    def _validate(
        self,
        category_id: int,
        amount,
        record_date: date,
        description: str | None,
    ) -> dict:
        if not category_id:
            raise ValidationError("category_id is required")
        if record_date is None:
            raise ValidationError(f"{self.records.date_field} is required")

        value: Decimal = validate_amount(amount)
        description = normalize_description(description)

        outcome = self.categories.check(category_id, self.kind)
        if outcome is not CategoryCheck.FOUND:
            raise InvalidCategoryError(self.kind, outcome)

        return {
            "category_id": category_id,
            "amount": value,
            "description": description,
            "record_date": record_date,
        }
