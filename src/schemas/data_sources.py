"""Pydantic schemas for DataSource API endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.db.enums import SourceType
from src.schemas.common import PartialUpdate, UrlStr

# =============================================================================
# Request Schemas
# =============================================================================


class DataSourceCreate(BaseModel):
    """Schema for creating a data source."""

    name: str = Field(min_length=1, max_length=255, description="Display name", examples=["SÚKL"])
    description: str | None = Field(default=None, description="Free-text description")
    source_type: SourceType = Field(description="Registry family")
    url: UrlStr | None = Field(default=None, description="Public landing page")
    api_endpoint: UrlStr | None = Field(default=None, description="Machine-readable endpoint")
    scraping_config: dict[str, Any] | None = Field(
        default=None, description="Free-form configuration for the external scraper"
    )


class DataSourceUpdate(PartialUpdate):
    """Partial update of a data source; ``is_active`` retires it."""

    non_nullable = frozenset({"name", "source_type", "is_active"})

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    source_type: SourceType | None = None
    url: UrlStr | None = None
    api_endpoint: UrlStr | None = None
    scraping_config: dict[str, Any] | None = None
    is_active: bool | None = None


# =============================================================================
# Response Schemas
# =============================================================================


class DataSourceResponse(BaseModel):
    """Schema for data source response."""

    id: int = Field(description="Data source id")
    name: str
    description: str | None
    source_type: SourceType
    url: str | None
    api_endpoint: str | None
    scraping_config: dict[str, Any] | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
