"""Pydantic schemas for DrugProduct API endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from src.db.enums import DrugProductStatus
from src.schemas.common import PartialUpdate, SearchParams, UrlStr


class ActiveIngredient(BaseModel):
    """One active substance of a product."""

    name: str
    strength: str
    unit: str


# =============================================================================
# Request Schemas
# =============================================================================


class DrugProductCreate(BaseModel):
    """Schema for creating a drug product."""

    sukl_id: str = Field(min_length=1, max_length=50, description="SÚKL registry code")
    name: str = Field(min_length=1, max_length=512)
    generic_name: str | None = Field(default=None, max_length=512)
    active_ingredients: list[ActiveIngredient] | None = None
    dosage_form: str | None = Field(default=None, max_length=255)
    strength: str | None = Field(default=None, max_length=255)
    route: str | None = Field(default=None, max_length=255)
    atc_code: str | None = Field(default=None, max_length=50, description="ATC classification code")
    manufacturer: str | None = Field(default=None, max_length=512)
    registration_number: str | None = Field(default=None, max_length=50)
    registration_date: date | None = None
    spc_url: UrlStr | None = None
    pil_url: UrlStr | None = None


class DrugProductUpdate(PartialUpdate):
    """Partial update of a drug product; ``status`` withdraws it."""

    non_nullable = frozenset({"sukl_id", "name", "status"})

    sukl_id: str | None = Field(default=None, min_length=1, max_length=50)
    name: str | None = Field(default=None, min_length=1, max_length=512)
    generic_name: str | None = Field(default=None, max_length=512)
    active_ingredients: list[ActiveIngredient] | None = None
    dosage_form: str | None = Field(default=None, max_length=255)
    strength: str | None = Field(default=None, max_length=255)
    route: str | None = Field(default=None, max_length=255)
    atc_code: str | None = Field(default=None, max_length=50)
    manufacturer: str | None = Field(default=None, max_length=512)
    registration_number: str | None = Field(default=None, max_length=50)
    registration_date: date | None = None
    spc_url: UrlStr | None = None
    pil_url: UrlStr | None = None
    status: DrugProductStatus | None = None


class DrugProductSearch(SearchParams):
    """Search products by name, optionally within an ATC group (code prefix)."""

    atc_code: str | None = Field(default=None, min_length=1, max_length=50)


# =============================================================================
# Response Schemas
# =============================================================================


class DrugProductResponse(BaseModel):
    """Schema for drug product response."""

    id: str
    sukl_id: str
    name: str
    generic_name: str | None
    active_ingredients: list[ActiveIngredient] | None
    dosage_form: str | None
    strength: str | None
    route: str | None
    atc_code: str | None
    manufacturer: str | None
    registration_number: str | None
    registration_date: date | None
    spc_url: str | None
    pil_url: str | None
    status: DrugProductStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
