"""
Pytest fixtures for the test database, HTTP client and authentication.

Each test gets a fresh in-memory SQLite database with foreign keys on,
and an application built around it. Argon2 runs with minimal work factors
to keep the suite fast.
"""

from datetime import datetime, timezone, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.core.config import Settings
from eventhub.core.security import CredentialHasher, TokenService
from eventhub.db.session import Database
from eventhub.main import create_app
from eventhub.models.event import Event
from eventhub.models.user import User
from eventhub.services.user_store import UserStore


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL="sqlite+aiosqlite://",
        AUTO_CREATE_TABLES=False,
        SECRET_KEY="test-secret-key-that-is-long-enough-for-hs256",
        PASSWORD_TIME_COST=1,
        PASSWORD_MEMORY_COST=8,
        PASSWORD_PARALLELISM=1,
    )


@pytest.fixture
def hasher(settings: Settings) -> CredentialHasher:
    return CredentialHasher.from_settings(settings)


@pytest.fixture
def token_service(settings: Settings) -> TokenService:
    return TokenService.from_settings(settings)


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Application with its tables created; dropped again after the test."""
    application = create_app(settings)
    database: Database = application.state.database
    await database.create_all()

    yield application

    await database.drop_all()
    await database.dispose()


@pytest_asyncio.fixture
async def db_session(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:
    async with app.state.database.session() as session:
        yield session


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession, hasher: CredentialHasher) -> User:
    """Owner of test_event."""
    return await UserStore(db_session, hasher).create("test@example.com", "testpassword123")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession, hasher: CredentialHasher) -> User:
    return await UserStore(db_session, hasher).create("other@example.com", "otherpassword123")


@pytest_asyncio.fixture
async def auth_token(test_user: User, token_service: TokenService) -> str:
    return token_service.issue(test_user.email, test_user.id)


@pytest_asyncio.fixture
async def auth_headers(auth_token: str) -> dict:
    """The raw token is the whole header value."""
    return {"Authorization": auth_token}


@pytest_asyncio.fixture
async def other_headers(other_user: User, token_service: TokenService) -> dict:
    return {"Authorization": token_service.issue(other_user.email, other_user.id)}


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession, test_user: User) -> Event:
    event = Event(
        name="Test Concert",
        description="A test event",
        location="Test Venue",
        date_time=datetime.now(timezone.utc) + timedelta(days=30),
        user_id=test_user.id,
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest.fixture
def event_data() -> dict:
    """Valid body for POST and PUT /events."""
    return {
        "name": "Python Conference",
        "description": "Annual Python gathering",
        "location": "Convention Center",
        "date_time": (datetime.now(timezone.utc) + timedelta(days=30)).isoformat(),
    }
