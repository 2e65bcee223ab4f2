"""Data-access functions for knowledge units."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.enums import KnowledgeUnitType
from src.db.models import KnowledgeUnit
from src.schemas import KnowledgeUnitCreate, KnowledgeUnitUpdate
from src.schemas.common import DEFAULT_LIST_LIMIT, DEFAULT_SEARCH_LIMIT
from src.store.base import fetch_all, fetch_by_id, insert_row, storage_operation, update_by_id

_NEWEST_FIRST = (KnowledgeUnit.created_at.desc(), KnowledgeUnit.id.desc())


@storage_operation("create knowledge unit")
async def create_knowledge_unit(db: AsyncSession, data: KnowledgeUnitCreate) -> KnowledgeUnit:
    return await insert_row(db, KnowledgeUnit(**data.model_dump()))


@storage_operation("get knowledge unit")
async def get_knowledge_unit_by_id(db: AsyncSession, unit_id: str) -> KnowledgeUnit | None:
    return await fetch_by_id(db, KnowledgeUnit, unit_id)


@storage_operation("list knowledge units")
async def list_knowledge_units(
    db: AsyncSession,
    limit: int = DEFAULT_LIST_LIMIT,
    offset: int = 0,
) -> list[KnowledgeUnit]:
    """All knowledge units, newest first."""
    query = select(KnowledgeUnit).order_by(*_NEWEST_FIRST).limit(limit).offset(offset)
    return await fetch_all(db, query)


@storage_operation("search knowledge units")
async def search_knowledge_units(
    db: AsyncSession,
    query: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
    category: str | None = None,
    unit_type: KnowledgeUnitType | None = None,
) -> list[KnowledgeUnit]:
    """Knowledge units whose title contains ``query``, optionally narrowed."""
    stmt = select(KnowledgeUnit).where(KnowledgeUnit.title.icontains(query, autoescape=True))
    if category is not None:
        stmt = stmt.where(KnowledgeUnit.category == category)
    if unit_type is not None:
        stmt = stmt.where(KnowledgeUnit.type == unit_type)
    return await fetch_all(db, stmt.order_by(*_NEWEST_FIRST).limit(limit))


@storage_operation("get knowledge units")
async def get_knowledge_units_by_category(
    db: AsyncSession,
    category: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[KnowledgeUnit]:
    """Knowledge units with exactly this category."""
    query = (
        select(KnowledgeUnit)
        .where(KnowledgeUnit.category == category)
        .order_by(*_NEWEST_FIRST)
        .limit(limit)
    )
    return await fetch_all(db, query)


@storage_operation("update knowledge unit")
async def update_knowledge_unit(db: AsyncSession, unit_id: str, data: KnowledgeUnitUpdate) -> int:
    return await update_by_id(db, KnowledgeUnit, unit_id, data.changes())
