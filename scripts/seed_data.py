#!/usr/bin/env python3
"""
Seed the database with a small sample knowledge base.

Writes go through the data-access layer directly, the same way the external
ingestion process does, and the run is recorded as an ETL job with log lines.
Products are matched on their SÚKL code, so re-running skips existing rows.

Usage:
    # Tables created by migrations (alembic upgrade head)
    python scripts/seed_data.py

    # Create tables first (local development only)
    python scripts/seed_data.py --create-tables

Requirements:
    - DATABASE_URL must point at a reachable database
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from src.core.config import settings  # noqa: E402
from src.core.errors import AppError  # noqa: E402
from src.core.logging import get_logger, setup_logging  # noqa: E402
from src.db import Database, EtlJobStatus, EtlJobType, LogLevel, get_db_context  # noqa: E402
from src.schemas import (  # noqa: E402
    DataSourceCreate,
    DocumentCreate,
    DrugInteractionCreate,
    DrugProductCreate,
    EtlJobCreate,
    EtlJobLogCreate,
    EtlJobUpdate,
    KnowledgeUnitCreate,
)
from src.store import (  # noqa: E402
    create_data_source,
    create_document,
    create_drug_interaction,
    create_drug_product,
    create_etl_job,
    create_etl_job_log,
    create_knowledge_unit,
    get_drug_product_by_sukl_id,
    update_etl_job,
)

logger = get_logger(__name__)

PRODUCTS = [
    DrugProductCreate(
        sukl_id="0094156",
        name="Warfarin Orion 5 mg",
        generic_name="warfarin",
        atc_code="B01AA03",
        dosage_form="tablet",
    ),
    DrugProductCreate(
        sukl_id="0215995",
        name="Anopyrin 100 mg",
        generic_name="acetylsalicylic acid",
        atc_code="B01AC06",
        dosage_form="tablet",
    ),
    DrugProductCreate(
        sukl_id="0012345",
        name="Prestarium Neo 5 mg",
        generic_name="perindopril arginine",
        atc_code="C09AA04",
        dosage_form="tablet",
    ),
]


async def seed_products(db: AsyncSession) -> tuple[dict[str, str], int]:
    """Create missing products. Returns (sukl_id -> id, created count)."""
    ids: dict[str, str] = {}
    created = 0
    for payload in PRODUCTS:
        existing = await get_drug_product_by_sukl_id(db, payload.sukl_id)
        if existing is None:
            existing = await create_drug_product(db, payload)
            created += 1
        ids[payload.sukl_id] = existing.id
    return ids, created


async def seed(database: Database) -> None:
    async with get_db_context(database) as db:
        source = await create_data_source(
            db,
            DataSourceCreate(name="SÚKL", source_type="SUKL", url="https://www.sukl.cz"),
        )
        job = await create_etl_job(
            db,
            EtlJobCreate(data_source_id=source.id, job_type=EtlJobType.FULL_IMPORT),
        )
        await update_etl_job(db, job.id, EtlJobUpdate(status=EtlJobStatus.RUNNING))

        try:
            product_ids, created = await seed_products(db)
            await create_etl_job_log(
                db,
                EtlJobLogCreate(
                    job_id=job.id,
                    message="Drug products imported",
                    details={"created": created, "total": len(product_ids)},
                ),
            )

            warfarin, aspirin = product_ids["0094156"], product_ids["0215995"]
            await create_drug_interaction(
                db,
                DrugInteractionCreate(
                    drug1_id=warfarin,
                    drug2_id=aspirin,
                    interaction_type="INTERACTION",
                    severity="HIGH",
                    clinical_effect="Increased risk of bleeding",
                    management="Avoid combination or monitor INR closely",
                ),
            )

            document = await create_document(
                db,
                DocumentCreate(
                    data_source_id=source.id,
                    title="SPC Warfarin Orion 5 mg",
                    url="https://www.sukl.cz/modules/medication/detail.php?code=0094156",
                    document_type="SPC",
                ),
            )
            await create_knowledge_unit(
                db,
                KnowledgeUnitCreate(
                    document_id=document.id,
                    type="INTERACTION",
                    title="Warfarin and antiplatelet agents",
                    content="Concomitant antiplatelet therapy increases bleeding risk.",
                    category="Cardiology",
                    severity="HIGH",
                ),
            )
        except AppError as e:
            await create_etl_job_log(
                db,
                EtlJobLogCreate(job_id=job.id, level=LogLevel.ERROR, message=e.message),
            )
            await update_etl_job(
                db,
                job.id,
                EtlJobUpdate(status=EtlJobStatus.FAILED, error_message=e.message),
            )
            raise

        await update_etl_job(
            db,
            job.id,
            EtlJobUpdate(status=EtlJobStatus.COMPLETED, items_processed=len(product_ids) + 3),
        )
        logger.info("Seed complete", job_id=job.id, products_created=created)


async def main_async(args: argparse.Namespace) -> int:
    database = Database.from_settings(settings)
    try:
        if args.create_tables:
            await database.create_all()
        await seed(database)
    except AppError as e:
        logger.error("Seeding failed", error_code=e.code, error=e.message)
        return 1
    finally:
        await database.dispose()
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the knowledge base with sample data")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables before seeding (instead of running migrations)",
    )
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(main_async(args)))


if __name__ == "__main__":
    main()
