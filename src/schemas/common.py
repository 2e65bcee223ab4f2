"""Common Pydantic schemas used across API endpoints."""

from typing import Annotated, Any, ClassVar, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    model_validator,
)

# =============================================================================
# Field types
# =============================================================================

_http_url = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    """Validate an http(s) URL but keep the caller's exact spelling."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid URL") from None
    return value


UrlStr = Annotated[str, Field(max_length=2048), AfterValidator(_check_url)]

DEFAULT_LIST_LIMIT = 100
DEFAULT_SEARCH_LIMIT = 50
MAX_LIMIT = 1000


# =============================================================================
# Pagination & search
# =============================================================================


class PaginationParams(BaseModel):
    """Query parameters for list endpoints."""

    limit: int = Field(default=DEFAULT_LIST_LIMIT, gt=0, le=MAX_LIMIT, description="Maximum rows to return")
    offset: int = Field(default=0, ge=0, description="Rows to skip")


class SearchParams(BaseModel):
    """Query parameters shared by substring search endpoints."""

    query: str = Field(min_length=1, max_length=255, description="Substring to look for")
    limit: int = Field(default=DEFAULT_SEARCH_LIMIT, gt=0, le=MAX_LIMIT, description="Maximum results")


# =============================================================================
# Nested value objects
# =============================================================================


class Evidence(BaseModel):
    """Evidence grading attached to knowledge units and interactions."""

    level: Literal["A", "B", "C", "D"] = Field(description="Evidence level")
    source: str = Field(description="Where the grading comes from")


# =============================================================================
# Update base
# =============================================================================


class PartialUpdate(BaseModel):
    """
    Base for update schemas: every field optional.

    Only fields the caller sends are persisted (``exclude_unset``). Fields
    listed in ``non_nullable`` may be omitted but not explicitly set to null.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_required(self) -> "PartialUpdate":
        nulled = sorted(
            name
            for name in self.model_fields_set & self.non_nullable
            if getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields supplied by the caller, ready for persistence."""
        return self.model_dump(exclude_unset=True)


# =============================================================================
# Responses
# =============================================================================


class MutationResponse(BaseModel):
    """Result of a create/update procedure."""

    success: bool = Field(default=True)
    id: str | int | None = Field(default=None, description="Id of the created/updated entity")
    message: str = Field(description="Human-readable result")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(description="Error message")
    code: str | None = Field(default=None, description="Error code")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(description="Machine-readable error kind")
    message: str = Field(description="Human-readable error message")
    details: list[ErrorDetail] | None = Field(
        default=None, description="Additional error details"
    )
