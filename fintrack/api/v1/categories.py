"""
Category API endpoints (read-only)
"""
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fintrack.api.deps import Identity, get_current_identity, get_db
from fintrack.domain.category import CATEGORY_TYPES, is_valid_category_type
from fintrack.domain.errors import ValidationError
from fintrack.infrastructure.repositories.categories import CategoryRepository


router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


class CategoryResponse(BaseModel):
    id: int
    name: str
    type: str
    created_at: datetime


@router.get("", response_model=list[CategoryResponse])
def list_categories(
    category_type: str | None = Query(None, alias="type"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """List all categories, optionally only one type (income / expense)"""
    repo = CategoryRepository(db)

    if category_type:
        if not is_valid_category_type(category_type):
            raise ValidationError(
                f"invalid category type: {category_type}. Use {' or '.join(CATEGORY_TYPES)}"
            )
        categories = repo.get_by_type(category_type)
    else:
        categories = repo.get_all()

    return [
        CategoryResponse(id=c.id, name=c.name, type=c.type, created_at=c.created_at)
        for c in categories
    ]
