"""Data source API endpoints."""

from fastapi import APIRouter, status

from src.api.deps import Context
from src.core.errors import NotFoundError
from src.core.logging import get_logger
from src.db.enums import AuditAction
from src.schemas import DataSourceCreate, DataSourceResponse, DataSourceUpdate, MutationResponse
from src.services import audit
from src.store import data_sources as store

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[DataSourceResponse],
    summary="List data sources",
    description="All active data sources.",
)
async def list_data_sources(ctx: Context) -> list[DataSourceResponse]:
    async with ctx.session() as db:
        sources = await store.list_data_sources(db)
    return [DataSourceResponse.model_validate(s) for s in sources]


@router.get(
    "/{data_source_id}",
    response_model=DataSourceResponse,
    summary="Get data source by ID",
)
async def get_data_source(data_source_id: int, ctx: Context) -> DataSourceResponse:
    async with ctx.session() as db:
        source = await store.get_data_source_by_id(db, data_source_id)
    if source is None:
        raise NotFoundError("Data source not found")
    return DataSourceResponse.model_validate(source)


@router.post(
    "",
    response_model=MutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a data source",
    description="Requires the editor role.",
)
async def create_data_source(payload: DataSourceCreate, ctx: Context) -> MutationResponse:
    user = ctx.require_role()
    async with ctx.session() as db:
        source = await store.create_data_source(db, payload)

    await audit.record(ctx, "data_source", source.id, AuditAction.CREATE, payload)
    logger.info("Data source created", data_source_id=source.id, user_id=user.id)

    return MutationResponse(id=source.id, message="Data source created")


@router.patch(
    "/{data_source_id}",
    response_model=MutationResponse,
    summary="Update a data source",
    description="Applies only the supplied fields. Requires the editor role.",
)
async def update_data_source(
    data_source_id: int,
    payload: DataSourceUpdate,
    ctx: Context,
) -> MutationResponse:
    user = ctx.require_role()
    async with ctx.session() as db:
        updated = await store.update_data_source(db, data_source_id, payload)

    await audit.record(ctx, "data_source", data_source_id, AuditAction.UPDATE, payload)
    logger.info("Data source updated", data_source_id=data_source_id, rows=updated, user_id=user.id)

    return MutationResponse(id=data_source_id, message="Data source updated")
