"""
Pytest fixtures for testing
"""
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from fintrack.api.deps import get_today
from fintrack.auth import CredentialService, TokenConfig
from fintrack.config import Settings
from fintrack.infrastructure.db import models  # noqa: F401  (register tables)
from fintrack.infrastructure.db.models import Category, User
from fintrack.infrastructure.db.session import Base, create_session_factory, enable_sqlite_foreign_keys
from fintrack.infrastructure.repositories.categories import CategoryRepository
from fintrack.main import create_app


TODAY = date(2026, 3, 15)
TEST_SECRET = "test-secret-key"


@pytest.fixture
def db_engine():
    """In-memory SQLite shared by all sessions of one test, foreign keys on"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    with SessionLocal() as db:
        CategoryRepository(db).ensure_defaults()
        db.commit()

    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def credentials() -> CredentialService:
    return CredentialService(TokenConfig(secret_key=TEST_SECRET))


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def categories(db_session) -> dict[str, Category]:
    """Seeded categories by name"""
    return {c.name: c for c in db_session.query(Category).all()}


@pytest.fixture
def make_user(db_session):
    """Insert users directly (password hash is irrelevant for most tests)"""
    counter = {"n": 0}

    def _make(username: str | None = None) -> User:
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        user = User(
            email=f"{username}@example.com",
            username=username,
            password_hash="not-a-real-hash",
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture
def app(db_engine):
    """App wired to the in-memory database and a fixed 'today'"""
    settings = Settings(SECRET_KEY=TEST_SECRET, DATABASE_URL="sqlite://", TIMEZONE="UTC")
    application = create_app(settings, init_database=False)

    application.state.engine = db_engine
    application.state.session_factory = create_session_factory(db_engine)
    application.dependency_overrides[get_today] = lambda: TODAY
    return application


@pytest.fixture
def client(app) -> TestClient:
    """FastAPI test client (lifespan not started, schema comes from db_engine)"""
    return TestClient(app)


@pytest.fixture
def register_user(client):
    """Register through the API; returns the response JSON plus auth headers"""

    def _register(username: str, password: str = "secret123") -> dict:
        response = client.post(
            "/api/v1/auth/register",
            json={
                "email": f"{username}@example.com",
                "username": username,
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        data = response.json()
        data["headers"] = {"Authorization": f"Bearer {data['token']}"}
        return data

    return _register


@pytest.fixture
def alice(register_user) -> dict:
    return register_user("alice")


@pytest.fixture
def bob(register_user) -> dict:
    return register_user("bob")