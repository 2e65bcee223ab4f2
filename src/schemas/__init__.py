"""Pydantic schemas for API request/response models."""

from src.schemas.audit import AuditLogResponse, LogoutResponse
from src.schemas.common import (
    DEFAULT_LIST_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    ErrorDetail,
    ErrorResponse,
    Evidence,
    MutationResponse,
    PaginationParams,
    PartialUpdate,
    SearchParams,
    UrlStr,
)
from src.schemas.data_sources import DataSourceCreate, DataSourceResponse, DataSourceUpdate
from src.schemas.documents import DocumentCreate, DocumentResponse, DocumentSearch, DocumentUpdate
from src.schemas.drug_interactions import (
    DrugInteractionCreate,
    DrugInteractionResponse,
    DrugInteractionUpdate,
    InteractionReference,
)
from src.schemas.drug_products import (
    ActiveIngredient,
    DrugProductCreate,
    DrugProductResponse,
    DrugProductSearch,
    DrugProductUpdate,
)
from src.schemas.jobs import (
    EtlJobCreate,
    EtlJobLogCreate,
    EtlJobLogResponse,
    EtlJobResponse,
    EtlJobUpdate,
)
from src.schemas.knowledge_units import (
    DocumentReference,
    KnowledgeUnitCategoryQuery,
    KnowledgeUnitCreate,
    KnowledgeUnitResponse,
    KnowledgeUnitSearch,
    KnowledgeUnitUpdate,
)

__all__ = [
    # Common
    "DEFAULT_LIST_LIMIT",
    "DEFAULT_SEARCH_LIMIT",
    "ErrorDetail",
    "ErrorResponse",
    "Evidence",
    "MutationResponse",
    "PaginationParams",
    "PartialUpdate",
    "SearchParams",
    "UrlStr",
    # Data sources
    "DataSourceCreate",
    "DataSourceResponse",
    "DataSourceUpdate",
    # Documents
    "DocumentCreate",
    "DocumentResponse",
    "DocumentSearch",
    "DocumentUpdate",
    # Knowledge units
    "DocumentReference",
    "KnowledgeUnitCategoryQuery",
    "KnowledgeUnitCreate",
    "KnowledgeUnitResponse",
    "KnowledgeUnitSearch",
    "KnowledgeUnitUpdate",
    # Drug products
    "ActiveIngredient",
    "DrugProductCreate",
    "DrugProductResponse",
    "DrugProductSearch",
    "DrugProductUpdate",
    # Drug interactions
    "DrugInteractionCreate",
    "DrugInteractionResponse",
    "DrugInteractionUpdate",
    "InteractionReference",
    # ETL jobs
    "EtlJobCreate",
    "EtlJobLogCreate",
    "EtlJobLogResponse",
    "EtlJobResponse",
    "EtlJobUpdate",
    # Audit & session
    "AuditLogResponse",
    "LogoutResponse",
]
