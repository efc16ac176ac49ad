"""
Tests for user use cases (register, login, settings)
"""
import pytest

from fintrack.application.users import LoginUseCase, ProfileService, RegisterUserUseCase
from fintrack.domain.errors import Conflict, InvalidCredentials, NotFound, ValidationError
from fintrack.infrastructure.db.models import User


def _register(db_session, credentials, email="alice@example.com", username="alice", password="secret123"):
    return RegisterUserUseCase(db_session, credentials).execute(
        email=email, username=username, password=password
    )


class TestRegister:
    def test_token_resolves_to_new_user(self, db_session, credentials):
        result = _register(db_session, credentials)

        claims = credentials.verify_token(result.token)
        assert claims.user_id == result.user.id
        assert claims.email == "alice@example.com"
        assert claims.username == "alice"

    def test_defaults_and_hashed_password(self, db_session, credentials):
        user = _register(db_session, credentials).user

        assert user.currency == "USD"
        assert user.theme == "light"
        assert user.password_hash != "secret123"
        assert user.created_at is not None

    def test_email_is_stored_lowercase(self, db_session, credentials):
        user = _register(db_session, credentials, email="Alice@Example.com").user
        assert user.email == "alice@example.com"

    def test_duplicate_email_case_insensitive(self, db_session, credentials):
        _register(db_session, credentials)

        with pytest.raises(Conflict, match="email"):
            _register(db_session, credentials, email="ALICE@example.com", username="alice2")

        assert db_session.query(User).count() == 1

    def test_duplicate_username(self, db_session, credentials):
        _register(db_session, credentials)

        with pytest.raises(Conflict, match="username"):
            _register(db_session, credentials, email="other@example.com")

        assert db_session.query(User).count() == 1

    def test_invalid_input(self, db_session, credentials):
        with pytest.raises(ValidationError):
            _register(db_session, credentials, password="123")

        assert db_session.query(User).count() == 0


class TestLogin:
    def test_login_by_email(self, db_session, credentials):
        registered = _register(db_session, credentials)

        result = LoginUseCase(db_session, credentials).execute("ALICE@example.com", "secret123")

        assert result.user.id == registered.user.id
        assert credentials.verify_token(result.token).user_id == registered.user.id

    def test_login_by_username(self, db_session, credentials):
        registered = _register(db_session, credentials)

        result = LoginUseCase(db_session, credentials).execute("alice", "secret123")

        assert result.user.id == registered.user.id

    def test_wrong_password(self, db_session, credentials):
        _register(db_session, credentials)

        with pytest.raises(InvalidCredentials):
            LoginUseCase(db_session, credentials).execute("alice", "wrong-password")

    def test_unknown_user_gets_same_error(self, db_session, credentials):
        with pytest.raises(InvalidCredentials):
            LoginUseCase(db_session, credentials).execute("nobody", "secret123")

    def test_missing_fields(self, db_session, credentials):
        with pytest.raises(ValidationError):
            LoginUseCase(db_session, credentials).execute("", "secret123")


class TestSettings:
    def test_update_both(self, db_session, credentials):
        user = _register(db_session, credentials).user

        updated = ProfileService(db_session).update_settings(user.id, currency="eur", theme="dark")

        assert updated.currency == "EUR"
        assert updated.theme == "dark"

    def test_partial_update_keeps_other_field(self, db_session, credentials):
        user = _register(db_session, credentials).user

        updated = ProfileService(db_session).update_settings(user.id, theme="dark")

        assert updated.currency == "USD"
        assert updated.theme == "dark"

    def test_invalid_theme_changes_nothing(self, db_session, credentials):
        user = _register(db_session, credentials).user

        with pytest.raises(ValidationError):
            ProfileService(db_session).update_settings(user.id, currency="GBP", theme="neon")

        assert ProfileService(db_session).get_profile(user.id).currency == "USD"

    def test_missing_user(self, db_session):
        with pytest.raises(NotFound):
            ProfileService(db_session).get_profile(999)
