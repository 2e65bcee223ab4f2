"""Drug interaction API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.api.deps import Context
from src.core.errors import NotFoundError
from src.core.logging import get_logger
from src.db.enums import AuditAction
from src.schemas import (
    DrugInteractionCreate,
    DrugInteractionResponse,
    DrugInteractionUpdate,
    MutationResponse,
    PaginationParams,
)
from src.services import audit
from src.store import drug_interactions as store

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[DrugInteractionResponse],
    summary="List drug interactions",
    description="Most severe first.",
)
async def list_drug_interactions(
    params: Annotated[PaginationParams, Query()],
    ctx: Context,
) -> list[DrugInteractionResponse]:
    async with ctx.session() as db:
        interactions = await store.list_drug_interactions(db, params.limit, params.offset)
    return [DrugInteractionResponse.model_validate(i) for i in interactions]


@router.get(
    "/by-drug/{drug_id}",
    response_model=list[DrugInteractionResponse],
    summary="Interactions involving a drug",
    description="Every interaction where the product is either side of the pair.",
)
async def get_drug_interactions_by_drug(drug_id: str, ctx: Context) -> list[DrugInteractionResponse]:
    async with ctx.session() as db:
        interactions = await store.get_drug_interactions_by_drug(db, drug_id)
    return [DrugInteractionResponse.model_validate(i) for i in interactions]


@router.get(
    "/{interaction_id}",
    response_model=DrugInteractionResponse,
    summary="Get drug interaction by ID",
)
async def get_drug_interaction(interaction_id: str, ctx: Context) -> DrugInteractionResponse:
    async with ctx.session() as db:
        interaction = await store.get_drug_interaction_by_id(db, interaction_id)
    if interaction is None:
        raise NotFoundError("Drug interaction not found")
    return DrugInteractionResponse.model_validate(interaction)


@router.post(
    "",
    response_model=MutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a drug interaction",
    description="Requires the editor role.",
)
async def create_drug_interaction(payload: DrugInteractionCreate, ctx: Context) -> MutationResponse:
    user = ctx.require_role()
    async with ctx.session() as db:
        interaction = await store.create_drug_interaction(db, payload)

    await audit.record(ctx, "drug_interaction", interaction.id, AuditAction.CREATE, payload)
    logger.info(
        "Drug interaction created",
        interaction_id=interaction.id,
        severity=interaction.severity.value,
        user_id=user.id,
    )

    return MutationResponse(id=interaction.id, message="Drug interaction created")


@router.patch(
    "/{interaction_id}",
    response_model=MutationResponse,
    summary="Update a drug interaction",
    description="Applies only the supplied fields. Requires the editor role.",
)
async def update_drug_interaction(
    interaction_id: str,
    payload: DrugInteractionUpdate,
    ctx: Context,
) -> MutationResponse:
    user = ctx.require_role()
    async with ctx.session() as db:
        updated = await store.update_drug_interaction(db, interaction_id, payload)

    await audit.record(ctx, "drug_interaction", interaction_id, AuditAction.UPDATE, payload)
    logger.info("Drug interaction updated", interaction_id=interaction_id, rows=updated, user_id=user.id)

    return MutationResponse(id=interaction_id, message="Drug interaction updated")
