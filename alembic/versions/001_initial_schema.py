"""Initial schema - create all knowledge base tables.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-17

This migration creates the complete knowledge base schema:
- data_sources: Registries and publishers content is ingested from
- documents: Source documents (guidelines, SPCs, PILs, ...)
- knowledge_units: Atomic clinical facts extracted from documents
- drug_products: Registered medicinal products
- drug_interactions: Pairwise drug interactions
- etl_jobs / etl_job_logs: External ingestion run tracking
- audit_logs: Append-only trail of create/update operations

Enum columns are stored as VARCHAR(32) holding the enum value, so new
members need no type migration.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSONB = postgresql.JSONB(astext_type=sa.Text())


def _enum() -> sa.String:
    return sa.String(length=32)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create all tables, indexes, and constraints."""

    # --------------------------------------------------------------------------
    # data_sources table
    # --------------------------------------------------------------------------
    op.create_table(
        "data_sources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False, comment="Display name"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("source_type", _enum(), nullable=False, comment="Registry family"),
        sa.Column("url", sa.String(length=2048), nullable=True),
        sa.Column("api_endpoint", sa.String(length=2048), nullable=True),
        sa.Column(
            "scraping_config",
            JSONB,
            nullable=True,
            comment="Free-form configuration for the external scraper",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_data_sources"),
    )
    op.create_index("ix_data_sources_source_type", "data_sources", ["source_type"])
    op.create_index("ix_data_sources_is_active", "data_sources", ["is_active"])

    # --------------------------------------------------------------------------
    # documents table
    # --------------------------------------------------------------------------
    op.create_table(
        "documents",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("data_source_id", sa.Integer(), nullable=False),
        sa.Column(
            "source_id",
            sa.String(length=255),
            nullable=True,
            comment="Identifier of the document at its source",
        ),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("url", sa.String(length=2048), nullable=False),
        sa.Column("download_url", sa.String(length=2048), nullable=True),
        sa.Column("document_type", _enum(), nullable=False),
        sa.Column("language", _enum(), nullable=False),
        sa.Column("published_date", sa.Date(), nullable=True),
        sa.Column("version", sa.String(length=50), nullable=True),
        sa.Column("authors", JSONB, nullable=True),
        sa.Column("categories", JSONB, nullable=True),
        sa.Column("tags", JSONB, nullable=True),
        sa.Column(
            "content_hash",
            sa.String(length=64),
            nullable=True,
            comment="Hash of downloaded content for change detection",
        ),
        sa.Column("status", _enum(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["data_source_id"],
            ["data_sources.id"],
            name="fk_documents_data_source_id_data_sources",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_documents"),
    )
    op.create_index("ix_documents_data_source_id", "documents", ["data_source_id"])
    op.create_index(
        "ix_documents_status_created_at",
        "documents",
        ["status", sa.text("created_at DESC")],
    )

    # --------------------------------------------------------------------------
    # knowledge_units table
    # --------------------------------------------------------------------------
    op.create_table(
        "knowledge_units",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column(
            "document_id",
            sa.String(length=64),
            nullable=False,
            comment="Id of the source document",
        ),
        sa.Column("type", _enum(), nullable=False),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("keywords", JSONB, nullable=True),
        sa.Column("category", sa.String(length=255), nullable=True, comment="Clinical area"),
        sa.Column("severity", _enum(), nullable=True),
        sa.Column("evidence", JSONB, nullable=True, comment="Evidence grading {level, source}"),
        sa.Column("references", JSONB, nullable=True),
        sa.Column("related_units", JSONB, nullable=True),
        sa.Column("extra_data", JSONB, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_knowledge_units"),
    )
    op.create_index("ix_knowledge_units_document_id", "knowledge_units", ["document_id"])
    op.create_index("ix_knowledge_units_type", "knowledge_units", ["type"])
    op.create_index("ix_knowledge_units_category", "knowledge_units", ["category"])
    op.create_index(
        "ix_knowledge_units_created_at",
        "knowledge_units",
        [sa.text("created_at DESC")],
    )

    # --------------------------------------------------------------------------
    # drug_products table
    # --------------------------------------------------------------------------
    op.create_table(
        "drug_products",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("sukl_id", sa.String(length=50), nullable=False, comment="SÚKL registry code"),
        sa.Column("name", sa.String(length=512), nullable=False),
        sa.Column("generic_name", sa.String(length=512), nullable=True),
        sa.Column("active_ingredients", JSONB, nullable=True),
        sa.Column("dosage_form", sa.String(length=255), nullable=True),
        sa.Column("strength", sa.String(length=255), nullable=True),
        sa.Column("route", sa.String(length=255), nullable=True),
        sa.Column("atc_code", sa.String(length=50), nullable=True),
        sa.Column("manufacturer", sa.String(length=512), nullable=True),
        sa.Column("registration_number", sa.String(length=50), nullable=True),
        sa.Column("registration_date", sa.Date(), nullable=True),
        sa.Column("spc_url", sa.String(length=2048), nullable=True),
        sa.Column("pil_url", sa.String(length=2048), nullable=True),
        sa.Column("status", _enum(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_drug_products"),
        sa.UniqueConstraint("sukl_id", name="uq_drug_products_sukl_id"),
    )
    op.create_index("ix_drug_products_name", "drug_products", ["name"])
    op.create_index("ix_drug_products_atc_code", "drug_products", ["atc_code"])
    op.create_index("ix_drug_products_status", "drug_products", ["status"])

    # --------------------------------------------------------------------------
    # drug_interactions table
    # --------------------------------------------------------------------------
    op.create_table(
        "drug_interactions",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("drug1_id", sa.String(length=64), nullable=False),
        sa.Column("drug2_id", sa.String(length=64), nullable=False),
        sa.Column("interaction_type", _enum(), nullable=False),
        sa.Column("severity", _enum(), nullable=False),
        sa.Column("mechanism", sa.Text(), nullable=True),
        sa.Column("clinical_effect", sa.Text(), nullable=True),
        sa.Column("management", sa.Text(), nullable=True),
        sa.Column("evidence", JSONB, nullable=True),
        sa.Column("references", JSONB, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_drug_interactions"),
    )
    op.create_index("ix_drug_interactions_drug1_id", "drug_interactions", ["drug1_id"])
    op.create_index("ix_drug_interactions_drug2_id", "drug_interactions", ["drug2_id"])
    op.create_index("ix_drug_interactions_pair", "drug_interactions", ["drug1_id", "drug2_id"])

    # --------------------------------------------------------------------------
    # etl_jobs table
    # --------------------------------------------------------------------------
    op.create_table(
        "etl_jobs",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("data_source_id", sa.Integer(), nullable=False),
        sa.Column("job_type", _enum(), nullable=False),
        sa.Column("status", _enum(), nullable=False),
        sa.Column("items_processed", sa.Integer(), nullable=False),
        sa.Column("items_failed", sa.Integer(), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("parameters", JSONB, nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "items_processed >= 0 AND items_failed >= 0",
            name="ck_etl_jobs_counters_non_negative",
        ),
        sa.ForeignKeyConstraint(
            ["data_source_id"],
            ["data_sources.id"],
            name="fk_etl_jobs_data_source_id_data_sources",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_etl_jobs"),
    )
    op.create_index("ix_etl_jobs_data_source_id", "etl_jobs", ["data_source_id"])
    op.create_index("ix_etl_jobs_status", "etl_jobs", ["status"])
    op.create_index("ix_etl_jobs_created_at", "etl_jobs", [sa.text("created_at DESC")])

    # --------------------------------------------------------------------------
    # etl_job_logs table
    # --------------------------------------------------------------------------
    op.create_table(
        "etl_job_logs",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("job_id", sa.String(length=64), nullable=False),
        sa.Column("level", _enum(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("details", JSONB, nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["job_id"],
            ["etl_jobs.id"],
            name="fk_etl_job_logs_job_id_etl_jobs",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_etl_job_logs"),
    )
    op.create_index("ix_etl_job_logs_job_timestamp", "etl_job_logs", ["job_id", "timestamp"])

    # --------------------------------------------------------------------------
    # audit_logs table
    # --------------------------------------------------------------------------
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column(
            "entity_type",
            sa.String(length=50),
            nullable=False,
            comment="Kind of the affected entity",
        ),
        sa.Column(
            "entity_id",
            sa.String(length=64),
            nullable=False,
            comment="Id of the affected entity",
        ),
        sa.Column("action", _enum(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("changes", JSONB, nullable=True, comment="Input payload of the mutation"),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.String(length=512), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_audit_logs"),
    )
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"])
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"])
    op.create_index(
        "ix_audit_logs_entity_id_timestamp",
        "audit_logs",
        ["entity_id", sa.text("timestamp DESC")],
    )


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table("audit_logs")
    op.drop_table("etl_job_logs")
    op.drop_table("etl_jobs")
    op.drop_table("drug_interactions")
    op.drop_table("drug_products")
    op.drop_table("knowledge_units")
    op.drop_table("documents")
    op.drop_table("data_sources")
