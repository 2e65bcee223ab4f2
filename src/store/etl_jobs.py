"""
Data-access functions for ETL job tracking.

Writes come from the external ingestion process; the API only reads.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import EtlJob, EtlJobLog
from src.schemas import EtlJobCreate, EtlJobLogCreate, EtlJobUpdate
from src.schemas.common import DEFAULT_LIST_LIMIT
from src.store.base import fetch_all, fetch_by_id, insert_row, storage_operation, update_by_id


@storage_operation("create ETL job")
async def create_etl_job(db: AsyncSession, data: EtlJobCreate) -> EtlJob:
    return await insert_row(db, EtlJob(**data.model_dump()))


@storage_operation("list ETL jobs")
async def list_etl_jobs(
    db: AsyncSession,
    limit: int = DEFAULT_LIST_LIMIT,
    offset: int = 0,
) -> list[EtlJob]:
    query = (
        select(EtlJob)
        .order_by(EtlJob.created_at.desc(), EtlJob.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return await fetch_all(db, query)


@storage_operation("get ETL job")
async def get_etl_job_by_id(db: AsyncSession, job_id: str) -> EtlJob | None:
    return await fetch_by_id(db, EtlJob, job_id)


@storage_operation("update ETL job")
async def update_etl_job(db: AsyncSession, job_id: str, data: EtlJobUpdate) -> int:
    return await update_by_id(db, EtlJob, job_id, data.changes())


@storage_operation("create ETL job log")
async def create_etl_job_log(db: AsyncSession, data: EtlJobLogCreate) -> EtlJobLog:
    return await insert_row(db, EtlJobLog(**data.model_dump()))


@storage_operation("get ETL job logs")
async def get_etl_job_logs(db: AsyncSession, job_id: str) -> list[EtlJobLog]:
    """Log lines of one job in emission order."""
    query = (
        select(EtlJobLog)
        .where(EtlJobLog.job_id == job_id)
        .order_by(EtlJobLog.timestamp.asc(), EtlJobLog.id.asc())
    )
    return await fetch_all(db, query)
