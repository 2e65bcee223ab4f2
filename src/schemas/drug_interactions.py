"""Pydantic schemas for DrugInteraction API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.db.enums import InteractionType, Severity
from src.schemas.common import Evidence, PartialUpdate, UrlStr


class InteractionReference(BaseModel):
    """Source backing an interaction."""

    document_id: str
    url: UrlStr | None = None


class DrugInteractionCreate(BaseModel):
    """Schema for creating a drug interaction."""

    drug1_id: str = Field(min_length=1, description="One drug product of the pair")
    drug2_id: str = Field(min_length=1, description="Other drug product of the pair")
    interaction_type: InteractionType
    severity: Severity
    mechanism: str | None = None
    clinical_effect: str | None = None
    management: str | None = None
    evidence: Evidence | None = None
    references: list[InteractionReference] | None = None


class DrugInteractionUpdate(PartialUpdate):
    """Partial update of a drug interaction."""

    non_nullable = frozenset({"drug1_id", "drug2_id", "interaction_type", "severity"})

    drug1_id: str | None = Field(default=None, min_length=1)
    drug2_id: str | None = Field(default=None, min_length=1)
    interaction_type: InteractionType | None = None
    severity: Severity | None = None
    mechanism: str | None = None
    clinical_effect: str | None = None
    management: str | None = None
    evidence: Evidence | None = None
    references: list[InteractionReference] | None = None


class DrugInteractionResponse(BaseModel):
    """Schema for drug interaction response."""

    id: str
    drug1_id: str
    drug2_id: str
    interaction_type: InteractionType
    severity: Severity
    mechanism: str | None
    clinical_effect: str | None
    management: str | None
    evidence: Evidence | None
    references: list[InteractionReference] | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
