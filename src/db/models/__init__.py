"""
Database models for the clinical knowledge base.

This package contains SQLAlchemy models for:
- DataSource: Registries and publishers feeding the knowledge base
- Document: Curated source documents
- KnowledgeUnit: Knowledge extracted from documents
- DrugProduct: Registered medicinal products
- DrugInteraction: Pairwise drug-drug interactions
- EtlJob / EtlJobLog: External ingestion run tracking
- AuditLog: Mutation audit trail

Usage:
    from src.db.models import Document, DrugProduct, AuditLog
"""

from src.db.models.audit_log import AuditLog
from src.db.models.data_source import DataSource
from src.db.models.document import Document
from src.db.models.drug_interaction import DrugInteraction
from src.db.models.drug_product import DrugProduct
from src.db.models.etl_job import EtlJob, EtlJobLog
from src.db.models.knowledge_unit import KnowledgeUnit

__all__ = [
    # Reference data
    "DataSource",
    "Document",
    "KnowledgeUnit",
    "DrugProduct",
    "DrugInteraction",
    # Ingestion tracking
    "EtlJob",
    "EtlJobLog",
    # Audit
    "AuditLog",
]
