"""Data-access functions for drug interactions."""

from sqlalchemy import case, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.enums import Severity
from src.db.models import DrugInteraction
from src.schemas import DrugInteractionCreate, DrugInteractionUpdate
from src.schemas.common import DEFAULT_LIST_LIMIT
from src.store.base import fetch_all, fetch_by_id, insert_row, storage_operation, update_by_id

# Severity is stored as text, so order by an explicit rank
_severity_rank = case(
    {severity: severity.rank for severity in Severity},
    value=DrugInteraction.severity,
    else_=-1,
)

# Most severe first, then insertion order
_MOST_SEVERE_FIRST = (
    _severity_rank.desc(),
    DrugInteraction.created_at.asc(),
    DrugInteraction.id.asc(),
)


@storage_operation("create drug interaction")
async def create_drug_interaction(db: AsyncSession, data: DrugInteractionCreate) -> DrugInteraction:
    return await insert_row(db, DrugInteraction(**data.model_dump()))


@storage_operation("get drug interaction")
async def get_drug_interaction_by_id(db: AsyncSession, interaction_id: str) -> DrugInteraction | None:
    return await fetch_by_id(db, DrugInteraction, interaction_id)


@storage_operation("list drug interactions")
async def list_drug_interactions(
    db: AsyncSession,
    limit: int = DEFAULT_LIST_LIMIT,
    offset: int = 0,
) -> list[DrugInteraction]:
    query = select(DrugInteraction).order_by(*_MOST_SEVERE_FIRST).limit(limit).offset(offset)
    return await fetch_all(db, query)


@storage_operation("get drug interactions")
async def get_drug_interactions_by_drug(db: AsyncSession, drug_id: str) -> list[DrugInteraction]:
    """Every interaction where ``drug_id`` is either side of the pair."""
    query = (
        select(DrugInteraction)
        .where(or_(DrugInteraction.drug1_id == drug_id, DrugInteraction.drug2_id == drug_id))
        .order_by(*_MOST_SEVERE_FIRST)
    )
    return await fetch_all(db, query)


@storage_operation("update drug interaction")
async def update_drug_interaction(db: AsyncSession, interaction_id: str, data: DrugInteractionUpdate) -> int:
    return await update_by_id(db, DrugInteraction, interaction_id, data.changes())
