"""
AuditLog model for tracking who changed which entity, and with what input.

Key features:
- One row per successful create/update
- Captures the validated input payload as ``changes``
- Captures request metadata (IP, user agent) when available
- Append-only (rows are never updated or deleted)

Usage:
    audit = AuditLog.create_entry(
        entity_type="document",
        entity_id=document.id,
        action=AuditAction.CREATE,
        user_id=user.id,
        changes=payload.model_dump(mode="json"),
    )
    session.add(audit)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, JSONType, StringIDMixin, enum_column
from src.db.enums import AuditAction


class AuditLog(StringIDMixin, Base):
    """
    Audit log entry.

    Attributes:
        id: UUID7 string primary key
        entity_type: Kind of entity ("document", "drug_product", ...)
        entity_id: Id of the affected entity (as text)
        action: CREATE, UPDATE or DELETE
        user_id: Acting user
        changes: Input payload of the mutation
        ip_address: Caller IP
        user_agent: Caller User-Agent header
        timestamp: When the action was logged

    This table is append-only - records should never be updated or deleted.
    """

    entity_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Kind of the affected entity",
    )

    entity_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Id of the affected entity",
    )

    action: Mapped[AuditAction] = mapped_column(
        enum_column(AuditAction),
        nullable=False,
        index=True,
    )

    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    changes: Mapped[dict | None] = mapped_column(
        JSONType,
        nullable=True,
        comment="Input payload of the mutation",
    )

    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)

    user_agent: Mapped[str | None] = mapped_column(String(512), nullable=True)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<AuditLog(entity={self.entity_type}:{self.entity_id}, action={self.action})>"

    @classmethod
    def create_entry(
        cls,
        entity_type: str,
        entity_id: str,
        action: AuditAction,
        user_id: str | None,
        changes: dict | None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> "AuditLog":
        """
        Create an audit log entry.

        Args:
            entity_type: Kind of entity (e.g., "drug_product")
            entity_id: Id of the affected entity
            action: Type of action
            user_id: Acting user id
            changes: JSON-serializable input payload
            ip_address: Caller IP, if known
            user_agent: Caller User-Agent, if known

        Returns:
            New AuditLog instance
        """
        return cls(
            entity_type=entity_type,
            entity_id=str(entity_id),
            action=action,
            user_id=user_id,
            changes=changes,
            ip_address=ip_address,
            user_agent=user_agent[:512] if user_agent else None,
        )


# Composite index for finding all audit entries for a specific entity
Index("ix_audit_logs_entity", AuditLog.entity_type, AuditLog.entity_id)

# Index for "history of this id" lookups, newest first
Index("ix_audit_logs_entity_id_timestamp", AuditLog.entity_id, AuditLog.timestamp.desc())
