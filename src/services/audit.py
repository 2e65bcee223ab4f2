"""
Audit trail for write procedures.

Each successful create/update appends one AuditLog row describing who did
what. The row is written in its own session after the primary write has
committed, so an audit failure can never roll back or fail the mutation:
it is logged and dropped.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from src.core.logging import get_logger
from src.db.enums import AuditAction
from src.db.models import AuditLog
from src.store import create_audit_log

if TYPE_CHECKING:
    from src.api.deps import RequestContext

logger = get_logger(__name__)


def audit_changes(payload: BaseModel, action: AuditAction) -> dict[str, Any]:
    """JSON-safe copy of the validated input; updates keep only sent fields."""
    return payload.model_dump(mode="json", by_alias=True, exclude_unset=action == AuditAction.UPDATE)


async def record(
    ctx: "RequestContext",
    entity_type: str,
    entity_id: str | int,
    action: AuditAction,
    payload: BaseModel,
) -> None:
    """
    Append an audit entry for a committed mutation.

    Never raises. Failures are logged with the entity reference.
    """
    try:
        entry = AuditLog.create_entry(
            entity_type=entity_type,
            entity_id=str(entity_id),
            action=action,
            user_id=ctx.user.id if ctx.user else None,
            changes=audit_changes(payload, action),
            ip_address=ctx.ip_address,
            user_agent=ctx.user_agent,
        )
        async with ctx.database.session() as db:
            await create_audit_log(db, entry)
    except Exception:
        logger.exception(
            "Failed to write audit log",
            entity_type=entity_type,
            entity_id=str(entity_id),
            action=action.value,
        )
