"""
Tests for user input rules
"""
import pytest

from fintrack.domain.errors import ValidationError
from fintrack.domain.user import (
    normalize_email,
    validate_currency,
    validate_registration,
    validate_theme,
)


def test_email_is_lowercased_and_trimmed():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"


class TestRegistration:
    def test_valid_input(self):
        validate_registration("a@example.com", "alice", "secret123")

    @pytest.mark.parametrize(
        "email, username, password",
        [
            ("", "alice", "secret123"),
            ("a@example.com", "", "secret123"),
            ("a@example.com", "alice", ""),
        ],
    )
    def test_missing_fields(self, email, username, password):
        with pytest.raises(ValidationError, match="required"):
            validate_registration(email, username, password)

    def test_short_password(self):
        with pytest.raises(ValidationError, match="at least 6"):
            validate_registration("a@example.com", "alice", "12345")

    def test_malformed_email(self):
        with pytest.raises(ValidationError, match="email"):
            validate_registration("not-an-email", "alice", "secret123")

    def test_username_with_at_sign(self):
        # Login treats anything with "@" as an email
        with pytest.raises(ValidationError):
            validate_registration("a@example.com", "al@ce", "secret123")


class TestSettingsValues:
    def test_currency_is_uppercased(self):
        assert validate_currency("eur") == "EUR"

    @pytest.mark.parametrize("currency", ["EU", "EURO", "12$"])
    def test_bad_currency(self, currency):
        with pytest.raises(ValidationError):
            validate_currency(currency)

    def test_themes(self):
        assert validate_theme("dark") == "dark"
        with pytest.raises(ValidationError):
            validate_theme("neon")
