"""
SQLAlchemy Base Configuration, Mixins and the Store Client.

This module provides:
- Base declarative class for all models
- Reusable mixins (UUID7 string primary key, timestamps)
- A portable JSON column type (JSONB on PostgreSQL)
- ``Database``: the explicitly constructed store client handed to the API
  layer at startup

All models in this project should inherit from `Base` and use the provided
mixins for consistency.
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, MetaData, String, func, text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from uuid6 import uuid7

from src.core.errors import StorageUnavailableError
from src.core.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# METADATA
# =============================================================================

# Naming convention for database constraints
# Keeps index/constraint names stable across environments for Alembic
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def new_id() -> str:
    """Generate a time-sortable opaque identifier."""
    return str(uuid7())


def enum_column(enum_cls: type) -> SAEnum:
    """
    Column type for a str-valued Enum.

    Stores the member *value* (e.g. ``"cs"``) as VARCHAR rather than a
    native database enum, so adding members needs no type migration.
    """
    return SAEnum(
        enum_cls,
        values_callable=lambda members: [member.value for member in members],
        native_enum=False,
        validate_strings=True,
        length=32,
    )


# =============================================================================
# BASE CLASS
# =============================================================================

class Base(AsyncAttrs, DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Features:
    - AsyncAttrs: Enables `await` on lazy-loaded relationships
    - Custom metadata with naming conventions
    - Automatic __tablename__ generation from class name

    Example:
        class DrugProduct(Base):
            # __tablename__ automatically set to "drug_products"
            name: Mapped[str] = mapped_column(String(512))
    """

    metadata = metadata

    __name__: str

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """
        Automatically generate table name from class name.

        Converts CamelCase to snake_case and pluralizes:
        - KnowledgeUnit -> knowledge_units
        - AuditLog -> audit_logs
        - DataSource -> data_sources
        """
        name = cls.__name__
        snake_case = "".join(
            f"_{char.lower()}" if char.isupper() and i > 0 else char.lower()
            for i, char in enumerate(name)
        )
        if snake_case.endswith("y"):
            return snake_case[:-1] + "ies"
        elif snake_case.endswith("s"):
            return snake_case + "es"
        else:
            return snake_case + "s"


# =============================================================================
# MIXINS
# =============================================================================

class StringIDMixin:
    """
    Mixin that provides an opaque string primary key (UUID7 text).

    The id is generated client-side on insert so it is known right after
    flush, and never changes afterwards.
    """

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=new_id,
        sort_order=-100,
    )


class TimestampMixin:
    """
    Mixin that provides created_at and updated_at timestamps.

    - created_at: Set once when row is inserted (server-side default)
    - updated_at: Refreshed on every ORM-level UPDATE
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        sort_order=100,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        sort_order=101,
    )


class CreatedAtMixin:
    """
    Mixin that provides only created_at timestamp.

    Use this for records that are never modified (ETL job log lines).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        sort_order=100,
    )


# =============================================================================
# STORE CLIENT
# =============================================================================

class Database:
    """
    Store client shared by every request.

    The engine is created lazily on first use and verified with a single
    ``SELECT 1``. If no URL is configured, or that first connection fails,
    the client becomes permanently unavailable for the process lifetime and
    every ``session()`` call raises StorageUnavailableError immediately.

    Usage:
        database = Database(settings.database_url)

        async with database.session() as db:
            result = await db.execute(select(Document))
    """

    def __init__(
        self,
        url: str | None,
        *,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: float = 10.0,
        command_timeout: float | None = None,
        engine_options: dict[str, Any] | None = None,
    ) -> None:
        self.url = url
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._pool_timeout = pool_timeout
        self._command_timeout = command_timeout
        self._engine_options = engine_options
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._unavailable = url is None
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Any) -> "Database":
        return cls(
            settings.database_url,
            echo=settings.db_echo,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            command_timeout=settings.db_command_timeout,
        )

    @property
    def is_unavailable(self) -> bool:
        return self._unavailable

    @property
    def is_connected(self) -> bool:
        return self._session_factory is not None

    def _build_engine(self) -> AsyncEngine:
        if self._engine_options is not None:
            return create_async_engine(self.url, **self._engine_options)

        options: dict[str, Any] = {"echo": self._echo, "pool_pre_ping": True}
        if not self.url.startswith("sqlite"):
            options.update(
                pool_size=self._pool_size,
                max_overflow=self._max_overflow,
                pool_timeout=self._pool_timeout,
            )
        if self.url.startswith("postgresql+asyncpg") and self._command_timeout:
            options["connect_args"] = {"command_timeout": self._command_timeout}
        return create_async_engine(self.url, **options)

    async def connect(self) -> None:
        """
        Create the engine and verify connectivity once.

        Safe to call repeatedly; only the first call does any work.
        Raises StorageUnavailableError if the store cannot be reached.
        """
        if self._session_factory is not None:
            return
        if self._unavailable:
            raise StorageUnavailableError()

        async with self._lock:
            if self._session_factory is not None:
                return
            if self._unavailable:
                raise StorageUnavailableError()

            engine = None
            try:
                engine = self._build_engine()
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
            except Exception as e:
                self._unavailable = True
                logger.warning("Database connection failed, running without storage", error=str(e))
                if engine is not None:
                    await engine.dispose()
                raise StorageUnavailableError() from e

            self._engine = engine
            # expire_on_commit=False keeps returned rows readable after commit
            self._session_factory = async_sessionmaker(
                bind=engine,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.info("Database connected", dialect=engine.dialect.name)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a session, connecting on first use.

        The session is NOT auto-committed; data-access functions commit
        explicitly. Uncommitted work is rolled back when the session closes.
        """
        await self.connect()
        async with self._session_factory() as session:
            yield session

    async def create_all(self) -> None:
        """
        Create all tables.

        Note: In production, use Alembic migrations instead.
        """
        await self.connect()
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        """Drop all tables. Only use in testing."""
        await self.connect()
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Dispose of the engine and close all pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()
