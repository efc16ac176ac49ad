"""
User profile & settings API endpoints
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fintrack.api.deps import Identity, get_current_identity, get_db
from fintrack.api.v1.schemas import MessageResponse, UserResponse
from fintrack.application.users import ProfileService


router = APIRouter(prefix="/api/v1/user", tags=["user"])


class UpdateSettingsRequest(BaseModel):
    currency: str | None = None  # ISO code, e.g. USD
    theme: str | None = None  # light / dark


@router.get("/profile", response_model=UserResponse)
def get_profile(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user = ProfileService(db).get_profile(identity.user_id)
    return UserResponse.from_model(user)


@router.put("/settings", response_model=MessageResponse)
def update_settings(
    req: UpdateSettingsRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Update currency and/or theme; omitted fields are left unchanged"""
    ProfileService(db).update_settings(
        identity.user_id,
        currency=req.currency,
        theme=req.theme,
    )
    return MessageResponse(message="Settings updated successfully")
