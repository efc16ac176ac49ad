"""
User domain rules: registration input and settings values
"""
import re

from fintrack.domain.errors import ValidationError


DEFAULT_CURRENCY = "USD"
DEFAULT_THEME = "light"

THEMES = ("light", "dark")

MIN_PASSWORD_LENGTH = 6

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")
_CURRENCY_RE = re.compile(r"^[A-Za-z]{3}$")


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively; stored lower-cased"""
    return email.strip().lower()


def validate_registration(email: str, username: str, password: str) -> None:
    """
    Raises:
        ValidationError: missing field, malformed email or short password
    """
    if not email or not username or not password:
        raise ValidationError("email, username, and password are required")
    if not _EMAIL_RE.match(email.strip()):
        raise ValidationError("invalid email address")
    if "@" in username:
        raise ValidationError("username must not contain '@'")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


def validate_currency(currency: str) -> str:
    if not _CURRENCY_RE.match(currency):
        raise ValidationError("currency must be a 3-letter code")
    return currency.upper()


def validate_theme(theme: str) -> str:
    if theme not in THEMES:
        raise ValidationError(f"theme must be one of: {', '.join(THEMES)}")
    return theme
