"""
Controlled vocabulary enums for the knowledge base.

These enums are shared by the ORM models and the Pydantic schemas so that
the literal sets accepted at the API boundary and stored in the database
are the same.
"""

from enum import Enum


class SourceType(str, Enum):
    """Origin registry or publisher of a data source."""

    SUKL = "SUKL"
    NIKEZ = "NIKEZ"
    WIKISKRIPTA = "WIKISKRIPTA"
    OTHER = "OTHER"


class DocumentType(str, Enum):
    """
    Kind of source document.

    SPC and PIL are the regulatory Summary of Product Characteristics and
    Patient Information Leaflet published with each registered product.
    """

    GUIDELINE = "GUIDELINE"
    SPC = "SPC"
    PIL = "PIL"
    PROCEDURE = "PROCEDURE"
    ARTICLE = "ARTICLE"
    OTHER = "OTHER"


class Language(str, Enum):
    CS = "cs"
    EN = "en"


class DocumentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"
    DELETED = "DELETED"


class KnowledgeUnitType(str, Enum):
    """Kind of knowledge extracted from a document."""

    GUIDELINE = "GUIDELINE"
    RECOMMENDATION = "RECOMMENDATION"
    PROCEDURE = "PROCEDURE"
    DEFINITION = "DEFINITION"
    INTERACTION = "INTERACTION"
    CONTRAINDICATION = "CONTRAINDICATION"


class Severity(str, Enum):
    """
    Clinical severity, lowest to highest.

    Ordering queries use ``rank`` rather than the string value.
    """

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return list(Severity).index(self)


class DrugProductStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    WITHDRAWN = "WITHDRAWN"


class InteractionType(str, Enum):
    CONTRAINDICATION = "CONTRAINDICATION"
    CAUTION = "CAUTION"
    INTERACTION = "INTERACTION"
    MONITORING = "MONITORING"


class EtlJobType(str, Enum):
    """Kind of ingestion run recorded by the external ETL process."""

    FULL_IMPORT = "FULL_IMPORT"
    INCREMENTAL_IMPORT = "INCREMENTAL_IMPORT"
    SCRAPE = "SCRAPE"
    EXTRACT = "EXTRACT"


class EtlJobStatus(str, Enum):
    """
    Status values for ETL jobs.

    Job lifecycle::

        PENDING -> RUNNING -> COMPLETED
                          |-> FAILED
                          |-> CANCELLED
    """

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class AuditAction(str, Enum):
    """Types of auditable actions."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
