"""Audit log API endpoints (editors and above)."""

from fastapi import APIRouter, Query

from src.api.deps import Context
from src.schemas import AuditLogResponse
from src.schemas.common import DEFAULT_LIST_LIMIT, MAX_LIMIT
from src.store import audit_logs as store

router = APIRouter()


@router.get(
    "",
    response_model=list[AuditLogResponse],
    summary="Audit history of an entity",
    description="Entries for one entity id, newest first. Requires the editor role.",
)
async def get_audit_logs(
    ctx: Context,
    entity_id: str = Query(min_length=1, max_length=64, description="Id of the audited entity"),
    limit: int = Query(default=DEFAULT_LIST_LIMIT, gt=0, le=MAX_LIMIT),
) -> list[AuditLogResponse]:
    ctx.require_role()
    async with ctx.session() as db:
        entries = await store.get_audit_logs(db, entity_id, limit)
    return [AuditLogResponse.model_validate(e) for e in entries]
