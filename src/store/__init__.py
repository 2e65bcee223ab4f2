"""
Data-access layer.

One async function per entity operation. Each takes an open AsyncSession,
commits its own writes, and converts driver errors to InternalError.
"""

from src.store.audit_logs import create_audit_log, get_audit_logs
from src.store.data_sources import (
    create_data_source,
    get_data_source_by_id,
    list_data_sources,
    update_data_source,
)
from src.store.documents import (
    create_document,
    get_document_by_id,
    list_documents,
    search_documents,
    update_document,
)
from src.store.drug_interactions import (
    create_drug_interaction,
    get_drug_interaction_by_id,
    get_drug_interactions_by_drug,
    list_drug_interactions,
    update_drug_interaction,
)
from src.store.drug_products import (
    create_drug_product,
    get_drug_product_by_id,
    get_drug_product_by_sukl_id,
    list_drug_products,
    search_drug_products,
    update_drug_product,
)
from src.store.etl_jobs import (
    create_etl_job,
    create_etl_job_log,
    get_etl_job_by_id,
    get_etl_job_logs,
    list_etl_jobs,
    update_etl_job,
)
from src.store.knowledge_units import (
    create_knowledge_unit,
    get_knowledge_unit_by_id,
    get_knowledge_units_by_category,
    list_knowledge_units,
    search_knowledge_units,
    update_knowledge_unit,
)

__all__ = [
    # Audit
    "create_audit_log",
    "get_audit_logs",
    # Data sources
    "create_data_source",
    "get_data_source_by_id",
    "list_data_sources",
    "update_data_source",
    # Documents
    "create_document",
    "get_document_by_id",
    "list_documents",
    "search_documents",
    "update_document",
    # Knowledge units
    "create_knowledge_unit",
    "get_knowledge_unit_by_id",
    "get_knowledge_units_by_category",
    "list_knowledge_units",
    "search_knowledge_units",
    "update_knowledge_unit",
    # Drug products
    "create_drug_product",
    "get_drug_product_by_id",
    "get_drug_product_by_sukl_id",
    "list_drug_products",
    "search_drug_products",
    "update_drug_product",
    # Drug interactions
    "create_drug_interaction",
    "get_drug_interaction_by_id",
    "get_drug_interactions_by_drug",
    "list_drug_interactions",
    "update_drug_interaction",
    # ETL jobs
    "create_etl_job",
    "create_etl_job_log",
    "get_etl_job_by_id",
    "get_etl_job_logs",
    "list_etl_jobs",
    "update_etl_job",
]
