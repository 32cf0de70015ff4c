"""
Shared test fixtures.

Each test gets its own SQLite database file and a freshly built
application, so no state leaks between tests.
"""

import os

os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-the-weather-forecast-api")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import build_engine, build_session_factory, create_tables
from app.main import create_app
from app.utils.localization import Localizer
from app.utils.security import PasswordHasher, TokenIssuer

TEST_PASSWORD = "Password123!"


class FakeClock:
    """Controllable UTC clock."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        SQLALCHEMY_DATABASE_URI=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY="test-secret-key-for-the-weather-forecast-api",
        PASSWORD_HASH_ROUNDS=4,
        RATE_LIMIT_ENABLED=False,
        CACHE_PROVIDER="memory",
        LOG_TO_FILE=False,
        DEBUG=False,
        MAX_FAILED_LOGIN_ATTEMPTS=5,
        ACCOUNT_LOCKOUT_DURATION_MINUTES=15,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def test_settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def client(test_settings, clock):
    """Test client fixture."""
    with TestClient(create_app(test_settings, clock=clock)) as test_client:
        yield test_client


@pytest.fixture
async def db(tmp_path):
    """Create test database."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'unit.db'}")
    await create_tables(engine)
    session_factory = build_session_factory(engine)

    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def password_hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_issuer():
    return TokenIssuer(
        secret_key="test-secret-key-for-the-weather-forecast-api",
        issuer="WeatherForecast.Api",
        audience="WeatherForecast.Client",
    )


@pytest.fixture
def localizer():
    return Localizer("en")


def register(client, username="testuser", password=TEST_PASSWORD):
    return client.post("/api/auth/register", json={"username": username, "password": password})


def login(client, username="testuser", password=TEST_PASSWORD):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def auth_headers(client, username="weatheruser"):
    """Register a user and return bearer headers for it."""
    token = register(client, username).json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
