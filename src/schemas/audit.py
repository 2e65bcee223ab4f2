"""Pydantic schemas for audit log and session endpoints."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.db.enums import AuditAction


class AuditLogResponse(BaseModel):
    """Schema for audit log entry."""

    id: str
    entity_type: str
    entity_id: str
    action: AuditAction
    user_id: str | None
    changes: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class LogoutResponse(BaseModel):
    """Result of clearing the session cookie."""

    success: Literal[True] = Field(default=True)
