"""
Database session management for FastAPI and standalone usage.

This module provides:
- FastAPI dependency returning the application's store client
- Context manager for scripts and the external ingestion process

Route handlers do not take a session dependency directly: they open one
from the request context only after input validation and authorization
have passed, so an unavailable store never masks those errors.

Usage in scripts:
    database = Database.from_settings(settings)
    async with get_db_context(database) as db:
        await create_data_source(db, payload)
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.base import Database


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the store client created at startup."""
    return request.app.state.database


@asynccontextmanager
async def get_db_context(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions outside of FastAPI.

    Raises StorageUnavailableError when the store has no connection.
    The session is automatically closed when exiting the context, even if
    an exception occurs.
    """
    async with database.session() as session:
        yield session
