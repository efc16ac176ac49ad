"""
Income / expense record domain: kinds, list filters, amount rules
"""
from dataclasses import dataclass
import datetime
from decimal import Decimal, InvalidOperation

from fintrack.domain.category import CATEGORY_TYPE_INCOME, CATEGORY_TYPE_EXPENSE
from fintrack.domain.errors import ValidationError


# Record kinds share the category type names
RECORD_KIND_INCOME = CATEGORY_TYPE_INCOME
RECORD_KIND_EXPENSE = CATEGORY_TYPE_EXPENSE

MAX_DESCRIPTION_LENGTH = 500

_CENT = Decimal("0.01")

# Largest value a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")


@dataclass(frozen=True)
class RecordFilter:
    """
    Optional constraints for listing and summing records.

    None means "no constraint on that field". All set fields apply together,
    start_date / end_date are inclusive.
    """
    category_id: int | None = None
    date: datetime.date | None = None
    start_date: datetime.date | None = None
    end_date: datetime.date | None = None

    def is_empty(self) -> bool:
        return (
            self.category_id is None
            and self.date is None
            and self.start_date is None
            and self.end_date is None
        )


def validate_amount(amount) -> Decimal:
    """
    Validate a record amount and normalize it to 2 decimal places

    Raises:
        ValidationError: not a number, more than 2 decimal places, <= 0
            or above MAX_AMOUNT
    """
    if amount is None or isinstance(amount, bool):
        raise ValidationError("amount is required")

    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError("amount must be a number")

    if not value.is_finite():
        raise ValidationError("amount must be a number")
    if value <= 0:
        raise ValidationError("amount must be greater than zero")
    if value > MAX_AMOUNT:
        raise ValidationError(f"amount must be at most {MAX_AMOUNT}")

    try:
        rounded = value.quantize(_CENT)
    except InvalidOperation:
        raise ValidationError("amount must be a number")
    if value != rounded:
        raise ValidationError("amount must have at most 2 decimal places")

    return rounded


def normalize_description(description: str | None) -> str | None:
    if description is None:
        return None
    description = description.strip()
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"description must be at most {MAX_DESCRIPTION_LENGTH} characters"
        )
    return description
