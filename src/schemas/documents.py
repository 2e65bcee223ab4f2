"""Pydantic schemas for Document API endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from src.db.enums import DocumentStatus, DocumentType, Language
from src.schemas.common import PartialUpdate, SearchParams, UrlStr

# =============================================================================
# Request Schemas
# =============================================================================


class DocumentCreate(BaseModel):
    """Schema for creating a new document."""

    data_source_id: int = Field(gt=0, description="Owning data source")
    source_id: str | None = Field(default=None, max_length=255, description="Identifier at the source")
    title: str = Field(min_length=1, max_length=512, description="Document title")
    description: str | None = Field(default=None, description="Abstract or short description")
    url: UrlStr = Field(description="Canonical page URL")
    download_url: UrlStr | None = Field(default=None, description="Direct file URL")
    document_type: DocumentType = Field(description="Kind of document")
    language: Language = Field(default=Language.CS, description="Document language")
    published_date: date | None = Field(default=None, description="Publication date")
    version: str | None = Field(default=None, max_length=50, description="Version label")
    authors: list[str] | None = Field(default=None, description="Author names")
    categories: list[str] | None = Field(default=None, description="Category labels")
    tags: list[str] | None = Field(default=None, description="Free tags")
    content_hash: str | None = Field(default=None, max_length=64, description="Content hash")


class DocumentUpdate(PartialUpdate):
    """Partial update of a document; ``status`` archives it."""

    non_nullable = frozenset({"data_source_id", "title", "url", "document_type", "language", "status"})

    data_source_id: int | None = Field(default=None, gt=0)
    source_id: str | None = Field(default=None, max_length=255)
    title: str | None = Field(default=None, min_length=1, max_length=512)
    description: str | None = None
    url: UrlStr | None = None
    download_url: UrlStr | None = None
    document_type: DocumentType | None = None
    language: Language | None = None
    published_date: date | None = None
    version: str | None = Field(default=None, max_length=50)
    authors: list[str] | None = None
    categories: list[str] | None = None
    tags: list[str] | None = None
    content_hash: str | None = Field(default=None, max_length=64)
    status: DocumentStatus | None = None


class DocumentSearch(SearchParams):
    """Search documents by title."""


# =============================================================================
# Response Schemas
# =============================================================================


class DocumentResponse(BaseModel):
    """Schema for document response."""

    id: str = Field(description="Document id")
    data_source_id: int
    source_id: str | None
    title: str
    description: str | None
    url: str
    download_url: str | None
    document_type: DocumentType
    language: Language
    published_date: date | None
    version: str | None
    authors: list[str] | None
    categories: list[str] | None
    tags: list[str] | None
    content_hash: str | None
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
