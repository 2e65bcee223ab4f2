"""Pydantic schemas for KnowledgeUnit API endpoints."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.db.enums import KnowledgeUnitType, Severity
from src.schemas.common import DEFAULT_SEARCH_LIMIT, MAX_LIMIT, Evidence, PartialUpdate, SearchParams


class DocumentReference(BaseModel):
    """Pointer into a source document."""

    document_id: str
    section: str | None = None
    page_number: int | None = None


# =============================================================================
# Request Schemas
# =============================================================================


class KnowledgeUnitCreate(BaseModel):
    """Schema for creating a knowledge unit."""

    document_id: str = Field(min_length=1, description="Source document id")
    type: KnowledgeUnitType = Field(description="Kind of knowledge")
    title: str = Field(min_length=1, max_length=512)
    content: str = Field(min_length=1, description="Full text (markdown)")
    summary: str | None = None
    keywords: list[str] | None = None
    category: str | None = Field(default=None, max_length=255, description="Clinical area")
    severity: Severity | None = None
    evidence: Evidence | None = None
    references: list[DocumentReference] | None = None
    related_units: list[str] | None = Field(default=None, description="Ids of related units")
    # Exposed as "metadata"; the column is extra_data because Base.metadata is taken
    extra_data: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("metadata", "extra_data"),
        serialization_alias="metadata",
        description="Additional metadata",
    )


class KnowledgeUnitUpdate(PartialUpdate):
    """Partial update of a knowledge unit."""

    non_nullable = frozenset({"document_id", "type", "title", "content"})

    document_id: str | None = Field(default=None, min_length=1)
    type: KnowledgeUnitType | None = None
    title: str | None = Field(default=None, min_length=1, max_length=512)
    content: str | None = Field(default=None, min_length=1)
    summary: str | None = None
    keywords: list[str] | None = None
    category: str | None = Field(default=None, max_length=255)
    severity: Severity | None = None
    evidence: Evidence | None = None
    references: list[DocumentReference] | None = None
    related_units: list[str] | None = None
    extra_data: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("metadata", "extra_data"),
        serialization_alias="metadata",
    )


class KnowledgeUnitSearch(SearchParams):
    """Search knowledge units by title, optionally narrowed by category and type."""

    category: str | None = Field(default=None, max_length=255)
    type: KnowledgeUnitType | None = None


class KnowledgeUnitCategoryQuery(BaseModel):
    """Exact-category lookup."""

    category: str = Field(min_length=1, max_length=255)
    limit: int = Field(default=DEFAULT_SEARCH_LIMIT, gt=0, le=MAX_LIMIT)


# =============================================================================
# Response Schemas
# =============================================================================


class KnowledgeUnitResponse(BaseModel):
    """Schema for knowledge unit response."""

    id: str
    document_id: str
    type: KnowledgeUnitType
    title: str
    content: str
    summary: str | None
    keywords: list[str] | None
    category: str | None
    severity: Severity | None
    evidence: Evidence | None
    references: list[DocumentReference] | None
    related_units: list[str] | None
    extra_data: dict[str, Any] | None = Field(
        validation_alias=AliasChoices("extra_data", "metadata"), serialization_alias="metadata"
    )
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
