"""API routers for the clinical knowledge base service."""

from src.api.audit_logs import router as audit_logs_router
from src.api.auth import router as auth_router
from src.api.data_sources import router as data_sources_router
from src.api.documents import router as documents_router
from src.api.drug_interactions import router as drug_interactions_router
from src.api.drug_products import router as drug_products_router
from src.api.etl_jobs import router as etl_jobs_router
from src.api.knowledge_units import router as knowledge_units_router

__all__ = [
    "audit_logs_router",
    "auth_router",
    "data_sources_router",
    "documents_router",
    "drug_interactions_router",
    "drug_products_router",
    "etl_jobs_router",
    "knowledge_units_router",
]
