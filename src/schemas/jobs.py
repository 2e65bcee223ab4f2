"""Pydantic schemas for ETL job API endpoints and the ingestion process."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.db.enums import EtlJobStatus, EtlJobType, LogLevel
from src.schemas.common import PartialUpdate

# =============================================================================
# Write Schemas (used by the external ingestion process)
# =============================================================================


class EtlJobCreate(BaseModel):
    """Record a new ingestion run."""

    data_source_id: int = Field(gt=0)
    job_type: EtlJobType
    status: EtlJobStatus = EtlJobStatus.PENDING
    parameters: dict[str, Any] | None = None


class EtlJobUpdate(PartialUpdate):
    """Progress/status update for an ingestion run."""

    non_nullable = frozenset({"status", "items_processed", "items_failed"})

    status: EtlJobStatus | None = None
    items_processed: int | None = Field(default=None, ge=0)
    items_failed: int | None = Field(default=None, ge=0)
    error_message: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None


class EtlJobLogCreate(BaseModel):
    """One log line emitted by an ingestion run."""

    job_id: str = Field(min_length=1)
    level: LogLevel = LogLevel.INFO
    message: str = Field(min_length=1)
    details: dict[str, Any] | None = None


# =============================================================================
# Response Schemas
# =============================================================================


class EtlJobResponse(BaseModel):
    """Schema for ETL job response."""

    id: str
    data_source_id: int
    job_type: EtlJobType
    status: EtlJobStatus
    items_processed: int
    items_failed: int
    error_message: str | None
    parameters: dict[str, Any] | None
    created_at: datetime
    started_at: datetime | None
    completed_at: datetime | None
    duration_seconds: float | None = Field(default=None, description="Run time so far, or total once finished")

    model_config = ConfigDict(from_attributes=True)


class EtlJobLogResponse(BaseModel):
    """Schema for ETL job log line."""

    id: str
    job_id: str
    level: LogLevel
    message: str
    details: dict[str, Any] | None
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
