"""
Per-request context shared by every procedure.

Handlers receive a RequestContext instead of a session dependency. The
context is built without touching storage, so FastAPI can finish input
validation and the handler can check roles before any session is opened.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import get_settings
from src.core.security import Role, SessionUser, decode_session_token, require_role
from src.db.base import Database
from src.db.session import get_database


@dataclass(frozen=True)
class RequestContext:
    """Store client, caller identity, and request metadata for auditing."""

    database: Database
    user: SessionUser | None = None
    ip_address: str | None = None
    user_agent: str | None = None

    def require_role(self, minimum: Role = Role.EDITOR) -> SessionUser:
        return require_role(self.user, minimum)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a store session; raises StorageUnavailableError without one."""
        async with self.database.session() as db:
            yield db


def get_session_user(request: Request) -> SessionUser | None:
    """Decode the session cookie, if any. Invalid cookies count as no session."""
    settings = get_settings()
    token = request.cookies.get(settings.session_cookie_name)
    return decode_session_token(token, settings.session_secret)


def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency building the RequestContext. Never raises."""
    return RequestContext(
        database=get_database(request),
        user=get_session_user(request),
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


Context = Annotated[RequestContext, Depends(get_request_context)]
