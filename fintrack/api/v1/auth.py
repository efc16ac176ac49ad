"""
Authentication routes (register, login)
"""
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fintrack.api.deps import get_credential_service, get_db
from fintrack.api.v1.schemas import UserResponse
from fintrack.application.users import LoginUseCase, RegisterUserUseCase
from fintrack.auth import CredentialService


router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


# === Request/Response models ===

class RegisterRequest(BaseModel):
    email: str = ""
    username: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    email_or_username: str = ""
    password: str = ""


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
    message: str


# === Endpoints ===

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    req: RegisterRequest,
    db: Session = Depends(get_db),
    credentials: CredentialService = Depends(get_credential_service),
):
    """Create an account and return a token for it"""
    result = RegisterUserUseCase(db, credentials).execute(
        email=req.email,
        username=req.username,
        password=req.password,
    )
    return AuthResponse(
        token=result.token,
        user=UserResponse.from_model(result.user),
        message="User registered successfully",
    )


@router.post("/login", response_model=AuthResponse)
def login(
    req: LoginRequest,
    db: Session = Depends(get_db),
    credentials: CredentialService = Depends(get_credential_service),
):
    """Log in with email or username"""
    result = LoginUseCase(db, credentials).execute(
        email_or_username=req.email_or_username,
        password=req.password,
    )
    return AuthResponse(
        token=result.token,
        user=UserResponse.from_model(result.user),
        message="Login successful",
    )
