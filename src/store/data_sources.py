"""Data-access functions for data sources."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import DataSource
from src.schemas import DataSourceCreate, DataSourceUpdate
from src.store.base import fetch_all, fetch_by_id, insert_row, storage_operation, update_by_id


@storage_operation("create data source")
async def create_data_source(db: AsyncSession, data: DataSourceCreate) -> DataSource:
    return await insert_row(db, DataSource(**data.model_dump(), is_active=True))


@storage_operation("get data source")
async def get_data_source_by_id(db: AsyncSession, data_source_id: int) -> DataSource | None:
    return await fetch_by_id(db, DataSource, data_source_id)


@storage_operation("list data sources")
async def list_data_sources(db: AsyncSession) -> list[DataSource]:
    """Active data sources, oldest first."""
    query = select(DataSource).where(DataSource.is_active.is_(True)).order_by(DataSource.id.asc())
    return await fetch_all(db, query)


@storage_operation("update data source")
async def update_data_source(db: AsyncSession, data_source_id: int, data: DataSourceUpdate) -> int:
    return await update_by_id(db, DataSource, data_source_id, data.changes())
