"""Knowledge unit API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.api.deps import Context
from src.core.errors import NotFoundError
from src.core.logging import get_logger
from src.db.enums import AuditAction
from src.schemas import (
    KnowledgeUnitCategoryQuery,
    KnowledgeUnitCreate,
    KnowledgeUnitResponse,
    KnowledgeUnitSearch,
    KnowledgeUnitUpdate,
    MutationResponse,
    PaginationParams,
)
from src.services import audit
from src.store import knowledge_units as store

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[KnowledgeUnitResponse],
    summary="List knowledge units",
    description="Knowledge units, newest first.",
)
async def list_knowledge_units(
    params: Annotated[PaginationParams, Query()],
    ctx: Context,
) -> list[KnowledgeUnitResponse]:
    async with ctx.session() as db:
        units = await store.list_knowledge_units(db, params.limit, params.offset)
    return [KnowledgeUnitResponse.model_validate(u) for u in units]


@router.get(
    "/search",
    response_model=list[KnowledgeUnitResponse],
    summary="Search knowledge units",
    description="Substring match on the title, optionally within a category and type.",
)
async def search_knowledge_units(
    params: Annotated[KnowledgeUnitSearch, Query()],
    ctx: Context,
) -> list[KnowledgeUnitResponse]:
    async with ctx.session() as db:
        units = await store.search_knowledge_units(
            db,
            params.query,
            params.limit,
            category=params.category,
            unit_type=params.type,
        )
    return [KnowledgeUnitResponse.model_validate(u) for u in units]


@router.get(
    "/by-category",
    response_model=list[KnowledgeUnitResponse],
    summary="Knowledge units in a category",
    description="Exact match on the category label.",
)
async def get_knowledge_units_by_category(
    params: Annotated[KnowledgeUnitCategoryQuery, Query()],
    ctx: Context,
) -> list[KnowledgeUnitResponse]:
    async with ctx.session() as db:
        units = await store.get_knowledge_units_by_category(db, params.category, params.limit)
    return [KnowledgeUnitResponse.model_validate(u) for u in units]


@router.get(
    "/{unit_id}",
    response_model=KnowledgeUnitResponse,
    summary="Get knowledge unit by ID",
)
async def get_knowledge_unit(unit_id: str, ctx: Context) -> KnowledgeUnitResponse:
    async with ctx.session() as db:
        unit = await store.get_knowledge_unit_by_id(db, unit_id)
    if unit is None:
        raise NotFoundError("Knowledge unit not found")
    return KnowledgeUnitResponse.model_validate(unit)


@router.post(
    "",
    response_model=MutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a knowledge unit",
    description="Requires the editor role.",
)
async def create_knowledge_unit(payload: KnowledgeUnitCreate, ctx: Context) -> MutationResponse:
    user = ctx.require_role()
    async with ctx.session() as db:
        unit = await store.create_knowledge_unit(db, payload)

    await audit.record(ctx, "knowledge_unit", unit.id, AuditAction.CREATE, payload)
    logger.info("Knowledge unit created", unit_id=unit.id, category=unit.category, user_id=user.id)

    return MutationResponse(id=unit.id, message="Knowledge unit created")


@router.patch(
    "/{unit_id}",
    response_model=MutationResponse,
    summary="Update a knowledge unit",
    description="Applies only the supplied fields. Requires the editor role.",
)
async def update_knowledge_unit(
    unit_id: str,
    payload: KnowledgeUnitUpdate,
    ctx: Context,
) -> MutationResponse:
    user = ctx.require_role()
    async with ctx.session() as db:
        updated = await store.update_knowledge_unit(db, unit_id, payload)

    await audit.record(ctx, "knowledge_unit", unit_id, AuditAction.UPDATE, payload)
    logger.info("Knowledge unit updated", unit_id=unit_id, rows=updated, user_id=user.id)

    return MutationResponse(id=unit_id, message="Knowledge unit updated")
