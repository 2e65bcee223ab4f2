"""
EtlJob and EtlJobLog models for tracking external ingestion runs.

The ingestion process (scrapers, parsers, extractors) lives outside this
service. It records each run here so the API can report what was imported,
when, and what went wrong. This service only reads these tables; the
data-access functions for writing them exist for the ingestion process.

Lifecycle:
    PENDING -> RUNNING -> COMPLETED
                      |-> FAILED
                      |-> CANCELLED
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, CreatedAtMixin, JSONType, StringIDMixin, enum_column
from src.db.enums import EtlJobStatus, EtlJobType, LogLevel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EtlJob(StringIDMixin, CreatedAtMixin, Base):
    """
    One run of the external ingestion process.

    Attributes:
        id: UUID7 string primary key
        data_source_id: Source being ingested
        job_type: FULL_IMPORT, INCREMENTAL_IMPORT, SCRAPE, EXTRACT
        status: Current state
        items_processed: Rows written so far
        items_failed: Rows rejected so far
        error_message: Error message if failed
        parameters: Job parameters and configuration
        started_at: When processing began
        completed_at: When processing finished
    """

    data_source_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("data_sources.id"),
        nullable=False,
        index=True,
    )

    job_type: Mapped[EtlJobType] = mapped_column(
        enum_column(EtlJobType),
        nullable=False,
    )

    status: Mapped[EtlJobStatus] = mapped_column(
        enum_column(EtlJobStatus),
        nullable=False,
        default=EtlJobStatus.PENDING,
        index=True,
    )

    # === Progress Tracking ===
    items_processed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    items_failed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    parameters: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    # === Timestamps ===
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "items_processed >= 0 AND items_failed >= 0",
            name="counters_non_negative",
        ),
    )

    def __repr__(self) -> str:
        return f"<EtlJob(id={self.id!r}, type={self.job_type}, status={self.status})>"

    @property
    def duration_seconds(self) -> float | None:
        """Job duration in seconds, None if it hasn't started."""
        if not self.started_at:
            return None
        now = _utcnow()
        if self.started_at.tzinfo is None:  # SQLite drops the offset
            now = now.replace(tzinfo=None)
        end_time = self.completed_at or now
        return (end_time - self.started_at).total_seconds()


class EtlJobLog(StringIDMixin, Base):
    """A timestamped log line emitted by an ETL job."""

    job_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("etl_jobs.id"),
        nullable=False,
    )

    level: Mapped[LogLevel] = mapped_column(
        enum_column(LogLevel),
        nullable=False,
        default=LogLevel.INFO,
    )

    message: Mapped[str] = mapped_column(Text, nullable=False)

    details: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<EtlJobLog(job={self.job_id!r}, level={self.level}, message={self.message[:50]!r})>"


Index("ix_etl_jobs_created_at", EtlJob.created_at.desc())
Index("ix_etl_job_logs_job_timestamp", EtlJobLog.job_id, EtlJobLog.timestamp)
