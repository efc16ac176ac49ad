"""
Category domain constants

Categories are shared by all users and classify income and expense records.
"""
import enum


# Category types
CATEGORY_TYPE_INCOME = "income"
CATEGORY_TYPE_EXPENSE = "expense"

CATEGORY_TYPES = (CATEGORY_TYPE_INCOME, CATEGORY_TYPE_EXPENSE)

# Seeded on first start (idempotent)
DEFAULT_INCOME_CATEGORIES = ["Salary", "Freelance", "Investment", "Other Income"]
DEFAULT_EXPENSE_CATEGORIES = [
    "Food",
    "Transport",
    "Rent",
    "Utilities",
    "Entertainment",
    "Healthcare",
    "Shopping",
    "Other Expense",
]


class CategoryCheck(enum.Enum):
    """Outcome of checking a category reference against a record kind"""
    FOUND = "found"
    NOT_FOUND = "not_found"
    TYPE_MISMATCH = "type_mismatch"


def is_valid_category_type(value: str) -> bool:
    return value in CATEGORY_TYPES


def default_categories() -> list[tuple[str, str]]:
    """(name, type) pairs for the seed set, income first"""
    return (
        [(name, CATEGORY_TYPE_INCOME) for name in DEFAULT_INCOME_CATEGORIES]
        + [(name, CATEGORY_TYPE_EXPENSE) for name in DEFAULT_EXPENSE_CATEGORIES]
    )
