"""Data-access functions for the audit log (append and read only)."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import AuditLog
from src.schemas.common import DEFAULT_LIST_LIMIT
from src.store.base import fetch_all, insert_row, storage_operation


@storage_operation("create audit log")
async def create_audit_log(db: AsyncSession, entry: AuditLog) -> AuditLog:
    return await insert_row(db, entry)


@storage_operation("get audit logs")
async def get_audit_logs(
    db: AsyncSession,
    entity_id: str,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[AuditLog]:
    """Audit history of one entity id, newest first."""
    query = (
        select(AuditLog)
        .where(AuditLog.entity_id == str(entity_id))
        .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        .limit(limit)
    )
    return await fetch_all(db, query)
