"""Data-access functions for drug products."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.enums import DrugProductStatus
from src.db.models import DrugProduct
from src.schemas import DrugProductCreate, DrugProductUpdate
from src.schemas.common import DEFAULT_LIST_LIMIT, DEFAULT_SEARCH_LIMIT
from src.store.base import fetch_all, fetch_by_id, insert_row, storage_operation, update_by_id


@storage_operation("create drug product")
async def create_drug_product(db: AsyncSession, data: DrugProductCreate) -> DrugProduct:
    return await insert_row(db, DrugProduct(**data.model_dump()))


@storage_operation("get drug product")
async def get_drug_product_by_id(db: AsyncSession, product_id: str) -> DrugProduct | None:
    return await fetch_by_id(db, DrugProduct, product_id)


@storage_operation("get drug product")
async def get_drug_product_by_sukl_id(db: AsyncSession, sukl_id: str) -> DrugProduct | None:
    result = await db.execute(
        select(DrugProduct)
        .where(DrugProduct.sukl_id == sukl_id)
        .limit(1)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@storage_operation("list drug products")
async def list_drug_products(
    db: AsyncSession,
    limit: int = DEFAULT_LIST_LIMIT,
    offset: int = 0,
) -> list[DrugProduct]:
    """Active products by name."""
    query = (
        select(DrugProduct)
        .where(DrugProduct.status == DrugProductStatus.ACTIVE)
        .order_by(DrugProduct.name.asc(), DrugProduct.id.asc())
        .limit(limit)
        .offset(offset)
    )
    return await fetch_all(db, query)


@storage_operation("search drug products")
async def search_drug_products(
    db: AsyncSession,
    query: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
    atc_code: str | None = None,
) -> list[DrugProduct]:
    """
    Active products whose name contains ``query``.

    ``atc_code`` narrows to an ATC group: "C09" matches "C09AA05".
    """
    stmt = select(DrugProduct).where(
        DrugProduct.status == DrugProductStatus.ACTIVE,
        DrugProduct.name.icontains(query, autoescape=True),
    )
    if atc_code:
        stmt = stmt.where(DrugProduct.atc_code.istartswith(atc_code, autoescape=True))
    return await fetch_all(db, stmt.order_by(DrugProduct.name.asc(), DrugProduct.id.asc()).limit(limit))


@storage_operation("update drug product")
async def update_drug_product(db: AsyncSession, product_id: str, data: DrugProductUpdate) -> int:
    return await update_by_id(db, DrugProduct, product_id, data.changes())
