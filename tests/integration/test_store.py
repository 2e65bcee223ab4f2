"""Data-access tests against an in-memory SQLite store."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import InternalError
from src.db.enums import DocumentStatus, DrugProductStatus, EtlJobStatus, LogLevel, Severity
from src.db.models import Document
from src.schemas import (
    DataSourceCreate,
    DataSourceUpdate,
    DocumentCreate,
    DocumentUpdate,
    DrugInteractionCreate,
    DrugInteractionUpdate,
    DrugProductCreate,
    DrugProductUpdate,
    EtlJobCreate,
    EtlJobLogCreate,
    EtlJobUpdate,
    KnowledgeUnitCreate,
    KnowledgeUnitUpdate,
)
from src.store import (
    create_data_source,
    create_document,
    create_drug_interaction,
    create_drug_product,
    create_etl_job,
    create_etl_job_log,
    create_knowledge_unit,
    get_data_source_by_id,
    get_document_by_id,
    get_drug_interaction_by_id,
    get_drug_product_by_id,
    get_drug_interactions_by_drug,
    get_drug_product_by_sukl_id,
    get_etl_job_by_id,
    get_etl_job_logs,
    get_knowledge_unit_by_id,
    get_knowledge_units_by_category,
    list_data_sources,
    list_documents,
    list_drug_interactions,
    list_drug_products,
    search_documents,
    search_drug_products,
    search_knowledge_units,
    update_data_source,
    update_document,
    update_drug_interaction,
    update_drug_product,
    update_etl_job,
    update_knowledge_unit,
)
from src.store.base import storage_operation

pytestmark = pytest.mark.asyncio


async def _source_id(db: AsyncSession) -> int:
    source = await create_data_source(db, DataSourceCreate(name="SÚKL", source_type="SUKL"))
    return source.id


async def _document(db: AsyncSession, source_id: int, title: str, **extra: object) -> Document:
    payload = DocumentCreate(
        data_source_id=source_id,
        title=title,
        url="https://example.org/doc",
        document_type="GUIDELINE",
        **extra,
    )
    return await create_document(db, payload)


async def _product(db: AsyncSession, sukl_id: str, name: str, atc_code: str | None = None):
    return await create_drug_product(
        db, DrugProductCreate(sukl_id=sukl_id, name=name, atc_code=atc_code)
    )


# =============================================================================
# Data sources
# =============================================================================


class TestDataSources:
    async def test_create_and_get(self, db_session: AsyncSession) -> None:
        source = await create_data_source(
            db_session,
            DataSourceCreate(name="SÚKL", source_type="SUKL", url="https://www.sukl.cz"),
        )
        assert isinstance(source.id, int)

        fetched = await get_data_source_by_id(db_session, source.id)
        assert fetched is not None
        assert fetched.name == "SÚKL"
        assert fetched.url == "https://www.sukl.cz"
        assert fetched.is_active is True

    async def test_list_hides_inactive(self, db_session: AsyncSession) -> None:
        first = await _source_id(db_session)
        second = await _source_id(db_session)
        await update_data_source(db_session, first, DataSourceUpdate(is_active=False))

        sources = await list_data_sources(db_session)
        assert [s.id for s in sources] == [second]

    async def test_update_changes_only_given_field(self, db_session: AsyncSession) -> None:
        source = await create_data_source(
            db_session,
            DataSourceCreate(
                name="SÚKL",
                source_type="SUKL",
                url="https://www.sukl.cz",
                description="Státní ústav",
            ),
        )

        rows = await update_data_source(db_session, source.id, DataSourceUpdate(name="SÚKL open data"))
        assert rows == 1

        fetched = await get_data_source_by_id(db_session, source.id)
        assert fetched.name == "SÚKL open data"
        assert fetched.url == "https://www.sukl.cz"
        assert fetched.description == "Státní ústav"
        assert fetched.is_active is True


# =============================================================================
# Documents
# =============================================================================


class TestDocuments:
    """Tests for document persistence."""

    async def test_round_trip(self, db_session: AsyncSession) -> None:
        source_id = await _source_id(db_session)
        created = await _document(
            db_session,
            source_id,
            "Hypertenze 2024",
            authors=["Novák J"],
            published_date="2024-03-01",
        )

        fetched = await get_document_by_id(db_session, created.id)
        assert fetched is not None
        assert fetched.title == "Hypertenze 2024"
        assert fetched.authors == ["Novák J"]
        assert fetched.published_date.isoformat() == "2024-03-01"
        assert fetched.status == DocumentStatus.ACTIVE
        assert fetched.created_at is not None

    async def test_get_missing(self, db_session: AsyncSession) -> None:
        assert await get_document_by_id(db_session, "missing") is None

    async def test_update_changes_only_given_field(self, db_session: AsyncSession) -> None:
        source_id = await _source_id(db_session)
        created = await _document(db_session, source_id, "Original", version="1.0", tags=["a"])

        rows = await update_document(db_session, created.id, DocumentUpdate(title="Renamed"))
        assert rows == 1

        fetched = await get_document_by_id(db_session, created.id)
        assert fetched.title == "Renamed"
        assert fetched.version == "1.0"
        assert fetched.tags == ["a"]
        assert fetched.url == "https://example.org/doc"

    async def test_update_missing_id_is_noop(self, db_session: AsyncSession) -> None:
        rows = await update_document(db_session, "does-not-exist", DocumentUpdate(title="X"))
        assert rows == 0

        count = await db_session.execute(select(func.count(Document.id)))
        assert count.scalar_one() == 0

    async def test_empty_update_is_noop(self, db_session: AsyncSession) -> None:
        source_id = await _source_id(db_session)
        created = await _document(db_session, source_id, "Original")
        assert await update_document(db_session, created.id, DocumentUpdate()) == 0

    async def test_list_newest_first_and_active_only(self, db_session: AsyncSession) -> None:
        source_id = await _source_id(db_session)
        first = await _document(db_session, source_id, "First")
        second = await _document(db_session, source_id, "Second")
        archived = await _document(db_session, source_id, "Archived")
        await update_document(db_session, archived.id, DocumentUpdate(status="ARCHIVED"))

        documents = await list_documents(db_session)
        assert [d.id for d in documents] == [second.id, first.id]

    async def test_list_pagination(self, db_session: AsyncSession) -> None:
        source_id = await _source_id(db_session)
        for i in range(5):
            await _document(db_session, source_id, f"Doc {i}")

        page = await list_documents(db_session, limit=2, offset=2)
        assert [d.title for d in page] == ["Doc 2", "Doc 1"]

    async def test_search_case_insensitive_substring(self, db_session: AsyncSession) -> None:
        source_id = await _source_id(db_session)
        await _document(db_session, source_id, "Arteriální HYPERTENZE")
        await _document(db_session, source_id, "Diabetes mellitus")

        results = await search_documents(db_session, "hypertenze")
        assert [d.title for d in results] == ["Arteriální HYPERTENZE"]

    async def test_search_wildcards_are_literal(self, db_session: AsyncSession) -> None:
        source_id = await _source_id(db_session)
        await _document(db_session, source_id, "Adherence 100% study")
        await _document(db_session, source_id, "Adherence 1000 patients")

        results = await search_documents(db_session, "100%")
        assert [d.title for d in results] == ["Adherence 100% study"]

        assert await search_documents(db_session, "_") == []

    async def test_search_excludes_inactive(self, db_session: AsyncSession) -> None:
        source_id = await _source_id(db_session)
        doc = await _document(db_session, source_id, "Old guideline")
        await update_document(db_session, doc.id, DocumentUpdate(status="DELETED"))

        assert await search_documents(db_session, "guideline") == []

    async def test_search_limit(self, db_session: AsyncSession) -> None:
        source_id = await _source_id(db_session)
        for i in range(3):
            await _document(db_session, source_id, f"Guideline {i}")

        assert len(await search_documents(db_session, "guideline", limit=2)) == 2


# =============================================================================
# Knowledge units
# =============================================================================


class TestKnowledgeUnits:
    async def _unit(self, db: AsyncSession, document_id: str, title: str, **extra: object):
        payload = KnowledgeUnitCreate(
            document_id=document_id,
            type=extra.pop("type", "RECOMMENDATION"),
            title=title,
            content="Obsah",
            **extra,
        )
        return await create_knowledge_unit(db, payload)

    async def test_round_trip_with_json_fields(self, db_session: AsyncSession) -> None:
        doc = await _document(db_session, await _source_id(db_session), "Doc")
        unit = await self._unit(
            db_session,
            doc.id,
            "ACE inhibitors",
            category="Cardiology",
            severity="HIGH",
            evidence={"level": "A", "source": "ESC"},
            keywords=["ace", "hypertension"],
            extra_data={"page": 12},
        )

        fetched = await get_knowledge_unit_by_id(db_session, unit.id)
        assert fetched.evidence == {"level": "A", "source": "ESC"}
        assert fetched.keywords == ["ace", "hypertension"]
        assert fetched.extra_data == {"page": 12}
        assert fetched.severity == Severity.HIGH

    async def test_by_category_exact_match(self, db_session: AsyncSession) -> None:
        doc = await _document(db_session, await _source_id(db_session), "Doc")
        cardio = await self._unit(db_session, doc.id, "A", category="Cardiology")
        await self._unit(db_session, doc.id, "B", category="Cardiology-Pediatric")
        await self._unit(db_session, doc.id, "C")

        units = await get_knowledge_units_by_category(db_session, "Cardiology", 10)
        assert [u.id for u in units] == [cardio.id]

    async def test_search_filters(self, db_session: AsyncSession) -> None:
        doc = await _document(db_session, await _source_id(db_session), "Doc")
        wanted = await self._unit(db_session, doc.id, "Warfarin dosing", category="Cardiology")
        await self._unit(db_session, doc.id, "Warfarin dosing", category="Neurology")
        await self._unit(db_session, doc.id, "Warfarin basics", category="Cardiology", type="DEFINITION")

        results = await search_knowledge_units(
            db_session, "warfarin", category="Cardiology", unit_type="RECOMMENDATION"
        )
        assert [u.id for u in results] == [wanted.id]

    async def test_update_clears_nullable_field(self, db_session: AsyncSession) -> None:
        doc = await _document(db_session, await _source_id(db_session), "Doc")
        unit = await self._unit(db_session, doc.id, "Unit", summary="Short")

        await update_knowledge_unit(db_session, unit.id, KnowledgeUnitUpdate(summary=None))

        fetched = await get_knowledge_unit_by_id(db_session, unit.id)
        assert fetched.summary is None
        assert fetched.title == "Unit"


# =============================================================================
# Drug products and interactions
# =============================================================================


class TestDrugProducts:
    async def test_by_sukl_id(self, db_session: AsyncSession) -> None:
        product = await _product(db_session, "0012345", "Prestarium")
        fetched = await get_drug_product_by_sukl_id(db_session, "0012345")
        assert fetched is not None
        assert fetched.id == product.id
        assert await get_drug_product_by_sukl_id(db_session, "9999999") is None

    async def test_list_ordered_by_name_active_only(self, db_session: AsyncSession) -> None:
        await _product(db_session, "1", "Zyrtec")
        await _product(db_session, "2", "Aspirin")
        withdrawn = await _product(db_session, "3", "Betaloc")
        await update_drug_product(db_session, withdrawn.id, DrugProductUpdate(status="WITHDRAWN"))

        products = await list_drug_products(db_session)
        assert [p.name for p in products] == ["Aspirin", "Zyrtec"]

        fetched = await get_drug_product_by_sukl_id(db_session, "3")
        assert fetched.status == DrugProductStatus.WITHDRAWN

    async def test_search_with_atc_prefix(self, db_session: AsyncSession) -> None:
        await _product(db_session, "1", "Perindopril Teva", atc_code="C09AA04")
        await _product(db_session, "2", "Ramipril Actavis", atc_code="C09AA05")
        await _product(db_session, "3", "Pril cream", atc_code="D02AX")

        results = await search_drug_products(db_session, "pril", atc_code="C09")
        assert [p.name for p in results] == ["Perindopril Teva", "Ramipril Actavis"]

        results = await search_drug_products(db_session, "PRIL")
        assert len(results) == 3

    async def test_update_changes_only_given_field(self, db_session: AsyncSession) -> None:
        product = await _product(db_session, "0012345", "Prestarium", atc_code="C09AA04")

        rows = await update_drug_product(db_session, product.id, DrugProductUpdate(strength="10 mg"))
        assert rows == 1

        fetched = await get_drug_product_by_id(db_session, product.id)
        assert fetched.strength == "10 mg"
        assert fetched.name == "Prestarium"
        assert fetched.atc_code == "C09AA04"
        assert fetched.status == DrugProductStatus.ACTIVE


class TestDrugInteractions:
    """Tests for interaction lookups and ordering."""

    async def _interaction(self, db: AsyncSession, drug1: str, drug2: str, severity: str):
        payload = DrugInteractionCreate(
            drug1_id=drug1,
            drug2_id=drug2,
            interaction_type="INTERACTION",
            severity=severity,
        )
        return await create_drug_interaction(db, payload)

    async def test_by_drug_matches_either_side(self, db_session: AsyncSession) -> None:
        a = await _product(db_session, "1", "A")
        b = await _product(db_session, "2", "B")
        c = await _product(db_session, "3", "C")
        ab = await self._interaction(db_session, a.id, b.id, "HIGH")
        ca = await self._interaction(db_session, c.id, a.id, "LOW")
        bc = await self._interaction(db_session, b.id, c.id, "MEDIUM")

        for_a = {i.id for i in await get_drug_interactions_by_drug(db_session, a.id)}
        assert for_a == {ab.id, ca.id}

        for_b = {i.id for i in await get_drug_interactions_by_drug(db_session, b.id)}
        assert for_b == {ab.id, bc.id}

        assert await get_drug_interactions_by_drug(db_session, "unrelated") == []

    async def test_list_most_severe_first(self, db_session: AsyncSession) -> None:
        low = await self._interaction(db_session, "a", "b", "LOW")
        critical = await self._interaction(db_session, "a", "c", "CRITICAL")
        high_1 = await self._interaction(db_session, "b", "c", "HIGH")
        high_2 = await self._interaction(db_session, "c", "d", "HIGH")
        medium = await self._interaction(db_session, "a", "d", "MEDIUM")

        interactions = await list_drug_interactions(db_session)
        assert [i.id for i in interactions] == [
            critical.id,
            high_1.id,
            high_2.id,
            medium.id,
            low.id,
        ]

    async def test_update_changes_only_given_field(self, db_session: AsyncSession) -> None:
        created = await create_drug_interaction(
            db_session,
            DrugInteractionCreate(
                drug1_id="a",
                drug2_id="b",
                interaction_type="INTERACTION",
                severity="MEDIUM",
                mechanism="CYP3A4 inhibition",
            ),
        )

        rows = await update_drug_interaction(
            db_session, created.id, DrugInteractionUpdate(severity="CRITICAL")
        )
        assert rows == 1

        fetched = await get_drug_interaction_by_id(db_session, created.id)
        assert fetched.severity == Severity.CRITICAL
        assert fetched.mechanism == "CYP3A4 inhibition"
        assert (fetched.drug1_id, fetched.drug2_id) == ("a", "b")


# =============================================================================
# ETL jobs
# =============================================================================


class TestEtlJobs:
    async def test_job_lifecycle_and_logs(self, db_session: AsyncSession) -> None:
        source_id = await _source_id(db_session)
        job = await create_etl_job(
            db_session,
            EtlJobCreate(data_source_id=source_id, job_type="SCRAPE", parameters={"pages": 3}),
        )
        assert job.status == EtlJobStatus.PENDING

        await update_etl_job(
            db_session,
            job.id,
            EtlJobUpdate(status="COMPLETED", items_processed=42),
        )
        await create_etl_job_log(db_session, EtlJobLogCreate(job_id=job.id, message="Started"))
        await create_etl_job_log(
            db_session,
            EtlJobLogCreate(job_id=job.id, level="WARNING", message="Skipped 1 page"),
        )

        fetched = await get_etl_job_by_id(db_session, job.id)
        assert fetched.status == EtlJobStatus.COMPLETED
        assert fetched.items_processed == 42
        assert fetched.items_failed == 0

        logs = await get_etl_job_logs(db_session, job.id)
        assert [line.message for line in logs] == ["Started", "Skipped 1 page"]
        assert logs[1].level == LogLevel.WARNING


# =============================================================================
# Error boundary
# =============================================================================


class TestStorageOperation:
    async def test_driver_error_becomes_internal(self) -> None:
        @storage_operation("load widgets")
        async def failing() -> None:
            raise OperationalError("SELECT 1", {}, Exception("connection reset by peer"))

        with pytest.raises(InternalError) as exc_info:
            await failing()
        assert exc_info.value.message == "Failed to load widgets"
        assert "connection reset" not in exc_info.value.message
