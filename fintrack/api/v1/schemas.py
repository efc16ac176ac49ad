"""
Shared request/response models
"""
from datetime import datetime

from pydantic import BaseModel

# Largest id a 64-bit INTEGER column holds
MAX_ID = 2**63 - 1


class UserResponse(BaseModel):
    """Public user profile (password hash is never part of it)"""
    id: int
    email: str
    username: str
    currency: str
    theme: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            currency=user.currency,
            theme=user.theme,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class MessageResponse(BaseModel):
    message: str
