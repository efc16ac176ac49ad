"""
Category repository (read access + idempotent seed)
"""
from sqlalchemy.orm import Session

from fintrack.domain.category import CategoryCheck, default_categories
from fintrack.infrastructure.db.models import Category


class CategoryRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[Category]:
        return self.db.query(Category).order_by(Category.type, Category.name).all()

    def get_by_type(self, category_type: str) -> list[Category]:
        return (
            self.db.query(Category)
            .filter(Category.type == category_type)
            .order_by(Category.name)
            .all()
        )

    def get_by_id(self, category_id: int) -> Category | None:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def check(self, category_id: int, kind: str) -> CategoryCheck:
        """Can a record of `kind` reference this category?"""
        category = self.get_by_id(category_id)
        if category is None:
            return CategoryCheck.NOT_FOUND
        if category.type != kind:
            return CategoryCheck.TYPE_MISMATCH
        return CategoryCheck.FOUND

    def ensure_defaults(self) -> int:
        """
        Insert default categories that are missing (matched by name)

        Returns:
            Number of categories created
        """
        existing = {name for (name,) in self.db.query(Category.name).all()}

        created = 0
        for name, category_type in default_categories():
            if name in existing:
                continue
            self.db.add(Category(name=name, type=category_type))
            created += 1

        self.db.flush()
        return created
