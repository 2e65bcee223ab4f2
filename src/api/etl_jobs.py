"""
ETL job API endpoints.

Read-only view of runs recorded by the external ingestion process.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from src.api.deps import Context
from src.core.errors import NotFoundError
from src.schemas import EtlJobLogResponse, EtlJobResponse, PaginationParams
from src.store import etl_jobs as store

router = APIRouter()


@router.get(
    "",
    response_model=list[EtlJobResponse],
    summary="List ETL jobs",
    description="Ingestion runs, newest first.",
)
async def list_etl_jobs(
    params: Annotated[PaginationParams, Query()],
    ctx: Context,
) -> list[EtlJobResponse]:
    async with ctx.session() as db:
        jobs = await store.list_etl_jobs(db, params.limit, params.offset)
    return [EtlJobResponse.model_validate(j) for j in jobs]


@router.get(
    "/{job_id}",
    response_model=EtlJobResponse,
    summary="Get ETL job by ID",
)
async def get_etl_job(job_id: str, ctx: Context) -> EtlJobResponse:
    async with ctx.session() as db:
        job = await store.get_etl_job_by_id(db, job_id)
    if job is None:
        raise NotFoundError("ETL job not found")
    return EtlJobResponse.model_validate(job)


@router.get(
    "/{job_id}/logs",
    response_model=list[EtlJobLogResponse],
    summary="Get ETL job logs",
    description="Log lines of a run in emission order.",
)
async def get_etl_job_logs(job_id: str, ctx: Context) -> list[EtlJobLogResponse]:
    async with ctx.session() as db:
        job = await store.get_etl_job_by_id(db, job_id)
        if job is None:
            raise NotFoundError("ETL job not found")
        logs = await store.get_etl_job_logs(db, job_id)
    return [EtlJobLogResponse.model_validate(line) for line in logs]
