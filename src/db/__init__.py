"""
Database package - SQLAlchemy models, the store client, and session helpers.

Usage:
    from src.db import Database, get_database, get_db_context
    from src.db import Document, DrugProduct, AuditLog
    from src.db import Severity, DocumentStatus
"""

from src.db.base import (
    Base,
    CreatedAtMixin,
    Database,
    JSONType,
    StringIDMixin,
    TimestampMixin,
    metadata,
    new_id,
)
from src.db.enums import (
    AuditAction,
    DocumentStatus,
    DocumentType,
    DrugProductStatus,
    EtlJobStatus,
    EtlJobType,
    InteractionType,
    KnowledgeUnitType,
    Language,
    LogLevel,
    Severity,
    SourceType,
)
from src.db.models import (
    AuditLog,
    DataSource,
    Document,
    DrugInteraction,
    DrugProduct,
    EtlJob,
    EtlJobLog,
    KnowledgeUnit,
)
from src.db.session import get_database, get_db_context

__all__ = [
    # Base classes and mixins
    "Base",
    "StringIDMixin",
    "TimestampMixin",
    "CreatedAtMixin",
    "JSONType",
    "metadata",
    "new_id",
    # Store client
    "Database",
    # Enums
    "AuditAction",
    "DocumentStatus",
    "DocumentType",
    "DrugProductStatus",
    "EtlJobStatus",
    "EtlJobType",
    "InteractionType",
    "KnowledgeUnitType",
    "Language",
    "LogLevel",
    "Severity",
    "SourceType",
    # Models
    "DataSource",
    "Document",
    "KnowledgeUnit",
    "DrugProduct",
    "DrugInteraction",
    "EtlJob",
    "EtlJobLog",
    "AuditLog",
    # Session utilities
    "get_database",
    "get_db_context",
]
