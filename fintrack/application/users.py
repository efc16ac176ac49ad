"""
User use cases - registration, login, profile settings
"""
import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fintrack.auth import CredentialService, dummy_verify
from fintrack.domain.errors import Conflict, InvalidCredentials, NotFound, ValidationError
from fintrack.domain.user import (
    DEFAULT_CURRENCY,
    DEFAULT_THEME,
    normalize_email,
    validate_currency,
    validate_registration,
    validate_theme,
)
from fintrack.infrastructure.db.models import User
from fintrack.infrastructure.repositories.users import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    token: str
    user: User


class RegisterUserUseCase:
    """Use case: create an account and return a token for it"""

    def __init__(self, db: Session, credentials: CredentialService):
        self.db = db
        self.credentials = credentials
        self.users = UserRepository(db)

    def execute(self, email: str, username: str, password: str) -> AuthResult:
        """
        Register a user

        Raises:
            ValidationError: missing/malformed input
            Conflict: email (case-insensitive) or username already taken
        """
        email = (email or "").strip()
        username = (username or "").strip()
        validate_registration(email, username, password)
        email = normalize_email(email)

        if self.users.get_by_email(email) is not None:
            raise Conflict("email already exists")
        if self.users.get_by_username(username) is not None:
            raise Conflict("username already exists")

        password_hash = self.credentials.hash_password(password)

        try:
            user = self.users.create(
                email=email,
                username=username,
                password_hash=password_hash,
                currency=DEFAULT_CURRENCY,
                theme=DEFAULT_THEME,
            )
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            self.db.rollback()
            raise Conflict("email or username already exists")

        logger.info("Registered user id=%s", user.id)
        token = self.credentials.issue_token(user.id, user.email, user.username)
        return AuthResult(token=token, user=user)


class LoginUseCase:
    """Use case: check credentials and issue a token"""

    def __init__(self, db: Session, credentials: CredentialService):
        self.db = db
        self.credentials = credentials
        self.users = UserRepository(db)

    def execute(self, email_or_username: str, password: str) -> AuthResult:
        """
        Raises:
            ValidationError: missing identifier or password
            InvalidCredentials: unknown user or wrong password
        """
        identifier = (email_or_username or "").strip()
        if not identifier or not password:
            raise ValidationError("email/username and password are required")

        if "@" in identifier:
            user = self.users.get_by_email(normalize_email(identifier))
        else:
            user = self.users.get_by_username(identifier)

        if user is None:
            dummy_verify()
            logger.info("Login failed: unknown user")
            raise InvalidCredentials()

        if not self.credentials.verify_password(user.password_hash, password):
            logger.info("Login failed: wrong password for user id=%s", user.id)
            raise InvalidCredentials()

        token = self.credentials.issue_token(user.id, user.email, user.username)
        return AuthResult(token=token, user=user)


class ProfileService:

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    def get_profile(self, user_id: int) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFound("user not found")
        return user

    def update_settings(
        self,
        user_id: int,
        currency: str | None = None,
        theme: str | None = None,
    ) -> User:
        """
        Update currency and/or theme; empty values are treated as "not provided"

        Raises:
            ValidationError: unsupported currency code or theme
            NotFound: user no longer exists
        """
        currency = validate_currency(currency) if currency else None
        theme = validate_theme(theme) if theme else None

        if not self.users.update_settings(user_id, currency=currency, theme=theme):
            raise NotFound("user not found")

        self.db.commit()
        return self.get_profile(user_id)
