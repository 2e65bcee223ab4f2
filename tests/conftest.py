"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from src.core.config import get_settings
from src.core.security import Role, SessionUser, encode_session_token
from src.db.base import Database
from src.db.models import AuditLog
from src.main import create_app

EDITOR = SessionUser(id="user-editor", role=Role.EDITOR, name="Eva Editor")
ADMIN = SessionUser(id="user-admin", role=Role.ADMIN)
VIEWER = SessionUser(id="user-viewer", role=Role.USER)


def in_memory_database() -> Database:
    """One shared SQLite connection so every session sees the same tables."""
    return Database(
        "sqlite+aiosqlite://",
        engine_options={
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        },
    )


# =============================================================================
# Database fixtures
# =============================================================================


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory store with all tables created."""
    db = in_memory_database()
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


async def count_audit_rows(database: Database) -> int:
    async with database.session() as session:
        result = await session.execute(select(func.count(AuditLog.id)))
        return result.scalar_one()


# =============================================================================
# API clients
# =============================================================================


def make_client(app: FastAPI, user: SessionUser | None = None) -> AsyncClient:
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    if user is not None:
        settings = get_settings()
        client.cookies.set(
            settings.session_cookie_name,
            encode_session_token(user, settings.session_secret),
        )
    return client


@pytest.fixture
def app(database: Database) -> FastAPI:
    return create_app(database)


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous client."""
    async with make_client(app) as ac:
        yield ac


@pytest_asyncio.fixture
async def editor_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with make_client(app, EDITOR) as ac:
        yield ac


@pytest_asyncio.fixture
async def viewer_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with make_client(app, VIEWER) as ac:
        yield ac


@pytest_asyncio.fixture
async def unavailable_editor_client() -> AsyncGenerator[AsyncClient, None]:
    """Editor client against an app with no database configured."""
    async with make_client(create_app(Database(None)), EDITOR) as ac:
        yield ac


@pytest_asyncio.fixture
async def unavailable_viewer_client() -> AsyncGenerator[AsyncClient, None]:
    async with make_client(create_app(Database(None)), VIEWER) as ac:
        yield ac


# =============================================================================
# Sample payloads
# =============================================================================


@pytest.fixture
def sample_data_source_data() -> dict[str, Any]:
    return {
        "name": "SÚKL",
        "source_type": "SUKL",
        "url": "https://www.sukl.cz",
        "description": "State Institute for Drug Control",
    }


@pytest.fixture
def sample_document_data() -> dict[str, Any]:
    """Document payload; ``data_source_id`` is filled in by the test."""
    return {
        "title": "Doporučený postup: Arteriální hypertenze 2024",
        "url": "https://example.org/guidelines/hypertension-2024.pdf",
        "document_type": "GUIDELINE",
        "language": "cs",
        "published_date": "2024-03-01",
        "authors": ["Novák J", "Svobodová K"],
        "categories": ["Cardiology"],
    }


@pytest.fixture
def sample_drug_product_data() -> dict[str, Any]:
    return {
        "sukl_id": "0012345",
        "name": "Prestarium Neo 5 mg",
        "generic_name": "perindopril arginine",
        "active_ingredients": [{"name": "perindopril", "strength": "5", "unit": "mg"}],
        "dosage_form": "tablet",
        "atc_code": "C09AA04",
        "manufacturer": "Les Laboratoires Servier",
    }


@pytest.fixture
def editor_user() -> SessionUser:
    return EDITOR


@pytest.fixture
def audit_row_count(database: Database) -> Callable[[], Awaitable[int]]:
    """Async callable returning the current number of audit rows."""

    async def count() -> int:
        return await count_audit_rows(database)

    return count
