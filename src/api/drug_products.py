"""Drug product API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.api.deps import Context
from src.core.errors import NotFoundError
from src.core.logging import get_logger
from src.db.enums import AuditAction
from src.schemas import (
    DrugProductCreate,
    DrugProductResponse,
    DrugProductSearch,
    DrugProductUpdate,
    MutationResponse,
    PaginationParams,
)
from src.services import audit
from src.store import drug_products as store

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[DrugProductResponse],
    summary="List drug products",
    description="Active products ordered by name.",
)
async def list_drug_products(
    params: Annotated[PaginationParams, Query()],
    ctx: Context,
) -> list[DrugProductResponse]:
    async with ctx.session() as db:
        products = await store.list_drug_products(db, params.limit, params.offset)
    return [DrugProductResponse.model_validate(p) for p in products]


@router.get(
    "/search",
    response_model=list[DrugProductResponse],
    summary="Search drug products",
    description="Substring match on the name, optionally within an ATC group.",
)
async def search_drug_products(
    params: Annotated[DrugProductSearch, Query()],
    ctx: Context,
) -> list[DrugProductResponse]:
    async with ctx.session() as db:
        products = await store.search_drug_products(
            db,
            params.query,
            params.limit,
            atc_code=params.atc_code,
        )
    return [DrugProductResponse.model_validate(p) for p in products]


@router.get(
    "/by-sukl/{sukl_id}",
    response_model=DrugProductResponse,
    summary="Get drug product by SÚKL code",
)
async def get_drug_product_by_sukl_id(sukl_id: str, ctx: Context) -> DrugProductResponse:
    async with ctx.session() as db:
        product = await store.get_drug_product_by_sukl_id(db, sukl_id)
    if product is None:
        raise NotFoundError("Drug product not found")
    return DrugProductResponse.model_validate(product)


@router.get(
    "/{product_id}",
    response_model=DrugProductResponse,
    summary="Get drug product by ID",
)
async def get_drug_product(product_id: str, ctx: Context) -> DrugProductResponse:
    async with ctx.session() as db:
        product = await store.get_drug_product_by_id(db, product_id)
    if product is None:
        raise NotFoundError("Drug product not found")
    return DrugProductResponse.model_validate(product)


@router.post(
    "",
    response_model=MutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a drug product",
    description="Requires the editor role.",
)
async def create_drug_product(payload: DrugProductCreate, ctx: Context) -> MutationResponse:
    user = ctx.require_role()
    async with ctx.session() as db:
        product = await store.create_drug_product(db, payload)

    await audit.record(ctx, "drug_product", product.id, AuditAction.CREATE, payload)
    logger.info("Drug product created", product_id=product.id, sukl_id=product.sukl_id, user_id=user.id)

    return MutationResponse(id=product.id, message="Drug product created")


@router.patch(
    "/{product_id}",
    response_model=MutationResponse,
    summary="Update a drug product",
    description="Applies only the supplied fields. Requires the editor role.",
)
async def update_drug_product(
    product_id: str,
    payload: DrugProductUpdate,
    ctx: Context,
) -> MutationResponse:
    user = ctx.require_role()
    async with ctx.session() as db:
        updated = await store.update_drug_product(db, product_id, payload)

    await audit.record(ctx, "drug_product", product_id, AuditAction.UPDATE, payload)
    logger.info("Drug product updated", product_id=product_id, rows=updated, user_id=user.id)

    return MutationResponse(id=product_id, message="Drug product updated")
