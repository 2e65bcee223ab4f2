"""
Shared plumbing for the data-access functions.

Every public data-access function is wrapped with ``storage_operation`` so
driver errors are logged with the operation name and re-raised as
InternalError; the raw driver message never leaves this layer.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from sqlalchemy import Select, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import InternalError
from src.core.logging import get_logger
from src.db.base import Base

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=Base)


def storage_operation(description: str) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for data-access functions.

    Args:
        description: Short verb phrase used in logs and the client message,
            e.g. "create document".
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(
                    "Storage operation failed",
                    operation=func.__name__,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise InternalError(f"Failed to {description}") from e

        return wrapper

    return decorator


async def insert_row(db: AsyncSession, row: ModelT) -> ModelT:
    """Insert, commit, and reload server-generated columns."""
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return row


async def fetch_by_id(db: AsyncSession, model: type[ModelT], row_id: Any) -> ModelT | None:
    result = await db.execute(
        select(model)
        .where(model.id == row_id)
        .limit(1)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def fetch_all(db: AsyncSession, query: Select) -> list[Any]:
    result = await db.execute(query.execution_options(populate_existing=True))
    return list(result.scalars().all())


async def update_by_id(db: AsyncSession, model: type[ModelT], row_id: Any, data: dict[str, Any]) -> int:
    """
    Apply ``data`` to one row and commit.

    Only the given columns change. A missing id updates nothing and is not
    an error; the affected row count is returned for callers that care.
    Identity-map copies are not synchronized; reads use populate_existing.
    """
    if not data:
        return 0
    result = await db.execute(
        update(model)
        .where(model.id == row_id)
        .values(**data)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount or 0
