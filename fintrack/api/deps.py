"""
FastAPI dependencies (DB session, credential service, bearer authentication)
"""
import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fintrack.auth import CredentialService, TokenError
from fintrack.config import Settings, get_settings
from fintrack.domain.errors import Unauthorized
from fintrack.utils.dates import today_in

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Session:
    """
    One session per request from the app's session factory, closed afterwards

    Usage:
        @router.get("/categories")
        def list_categories(db: Session = Depends(get_db)):
            ...
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, taken from token claims (no DB lookup)"""
    user_id: int
    email: str
    username: str


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_credential_service(request: Request) -> CredentialService:
    return request.app.state.credentials


def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    service: CredentialService = Depends(get_credential_service),
) -> Identity:
    """
    Resolve the bearer token to the caller's identity

    Raises:
        Unauthorized: missing/malformed header or token failing verification.
            Every cause produces the same outward error.

    Usage:
        @router.get("/profile")
        def get_profile(identity: Identity = Depends(get_current_identity)):
            ...
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    try:
        claims = service.verify_token(credentials.credentials)
    except TokenError as e:
        logger.debug("Rejected bearer token: %s", type(e).__name__)
        raise Unauthorized()

    identity = Identity(
        user_id=claims.user_id,
        email=claims.email,
        username=claims.username,
    )
    request.state.identity = identity
    return identity


def get_today(settings: Settings = Depends(get_app_settings)):
    """Current date in the configured timezone, evaluated per request"""
    return today_in(settings.TIMEZONE)
