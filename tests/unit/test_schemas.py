"""Unit tests for request schema validation."""

import pytest
from pydantic import ValidationError

from src.db.enums import AuditAction, DocumentType, Severity
from src.schemas import (
    DataSourceCreate,
    DocumentCreate,
    DocumentUpdate,
    DrugInteractionCreate,
    DrugProductSearch,
    KnowledgeUnitCreate,
    PaginationParams,
    SearchParams,
)
from src.services.audit import audit_changes


class TestDataSourceCreate:
    def test_valid(self) -> None:
        source = DataSourceCreate(name="SÚKL", source_type="SUKL")
        assert source.source_type.value == "SUKL"
        assert source.url is None

    def test_unknown_source_type(self) -> None:
        with pytest.raises(ValidationError):
            DataSourceCreate(name="X", source_type="PUBMED")

    def test_empty_name(self) -> None:
        with pytest.raises(ValidationError):
            DataSourceCreate(name="", source_type="SUKL")


class TestDocumentCreate:
    """Tests for document input validation."""

    def test_valid_minimal(self) -> None:
        doc = DocumentCreate(
            data_source_id=1,
            title="Guideline",
            url="https://example.org/a",
            document_type="GUIDELINE",
        )
        assert doc.document_type == DocumentType.GUIDELINE
        assert doc.language.value == "cs"

    def test_url_kept_verbatim(self) -> None:
        doc = DocumentCreate(
            data_source_id=1,
            title="Guideline",
            url="https://example.org",
            document_type="SPC",
        )
        assert doc.url == "https://example.org"

    @pytest.mark.parametrize("url", ["not a url", "ftp://example.org/file", ""])
    def test_invalid_url(self, url: str) -> None:
        with pytest.raises(ValidationError):
            DocumentCreate(data_source_id=1, title="T", url=url, document_type="SPC")

    def test_missing_required_field(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            DocumentCreate(data_source_id=1, url="https://example.org", document_type="SPC")
        assert exc_info.value.errors()[0]["loc"] == ("title",)

    def test_invalid_language(self) -> None:
        with pytest.raises(ValidationError):
            DocumentCreate(
                data_source_id=1,
                title="T",
                url="https://example.org",
                document_type="SPC",
                language="de",
            )


class TestPartialUpdate:
    """Tests for update schemas."""

    def test_only_sent_fields_are_changes(self) -> None:
        update = DocumentUpdate(title="New title")
        assert update.changes() == {"title": "New title"}

    def test_empty_update(self) -> None:
        assert DocumentUpdate().changes() == {}

    def test_nullable_field_can_be_cleared(self) -> None:
        assert DocumentUpdate(description=None).changes() == {"description": None}

    def test_required_field_cannot_be_nulled(self) -> None:
        with pytest.raises(ValidationError, match="title"):
            DocumentUpdate(title=None)


class TestKnowledgeUnitCreate:
    def test_evidence_level(self) -> None:
        unit = KnowledgeUnitCreate(
            document_id="d1",
            type="RECOMMENDATION",
            title="ACE inhibitors first line",
            content="...",
            evidence={"level": "A", "source": "ESC 2023"},
        )
        assert unit.evidence is not None
        assert unit.evidence.level == "A"

    def test_invalid_evidence_level(self) -> None:
        with pytest.raises(ValidationError):
            KnowledgeUnitCreate(
                document_id="d1",
                type="RECOMMENDATION",
                title="T",
                content="C",
                evidence={"level": "E", "source": "x"},
            )

    def test_metadata_accepted_under_client_name(self) -> None:
        unit = KnowledgeUnitCreate(
            document_id="d1", type="DEFINITION", title="T", content="C", metadata={"page": 3}
        )
        assert unit.extra_data == {"page": 3}
        assert audit_changes(unit, AuditAction.CREATE)["metadata"] == {"page": 3}


class TestDrugInteractionCreate:
    def test_severity_enum(self) -> None:
        interaction = DrugInteractionCreate(
            drug1_id="a", drug2_id="b", interaction_type="CAUTION", severity="HIGH"
        )
        assert interaction.severity == Severity.HIGH

    def test_unknown_severity(self) -> None:
        with pytest.raises(ValidationError):
            DrugInteractionCreate(
                drug1_id="a", drug2_id="b", interaction_type="CAUTION", severity="SEVERE"
            )


class TestQueryParams:
    """Tests for list and search parameter bounds."""

    def test_pagination_defaults(self) -> None:
        params = PaginationParams()
        assert params.limit == 100
        assert params.offset == 0

    @pytest.mark.parametrize("kwargs", [{"limit": 0}, {"limit": 1001}, {"offset": -1}])
    def test_pagination_bounds(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValidationError):
            PaginationParams(**kwargs)

    def test_search_defaults(self) -> None:
        assert SearchParams(query="aspirin").limit == 50

    def test_search_requires_query(self) -> None:
        with pytest.raises(ValidationError):
            SearchParams(query="")

    def test_drug_product_search_atc(self) -> None:
        params = DrugProductSearch(query="pril", atc_code="C09")
        assert params.atc_code == "C09"


class TestAuditChanges:
    def test_create_dumps_full_payload_as_json(self) -> None:
        doc = DocumentCreate(
            data_source_id=1,
            title="T",
            url="https://example.org",
            document_type="SPC",
            published_date="2024-01-02",
        )
        changes = audit_changes(doc, AuditAction.CREATE)
        assert changes["published_date"] == "2024-01-02"
        assert changes["document_type"] == "SPC"
        assert "description" in changes

    def test_update_dumps_sent_fields_only(self) -> None:
        changes = audit_changes(DocumentUpdate(status="ARCHIVED"), AuditAction.UPDATE)
        assert changes == {"status": "ARCHIVED"}
