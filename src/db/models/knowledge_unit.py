"""
KnowledgeUnit model for atomic pieces of clinical knowledge.

A knowledge unit is one recommendation, definition, contraindication etc.
extracted from a Document, with optional evidence grading and
cross-references to other documents and units.
"""

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, JSONType, StringIDMixin, TimestampMixin, enum_column
from src.db.enums import KnowledgeUnitType, Severity


class KnowledgeUnit(StringIDMixin, TimestampMixin, Base):
    """
    A unit of extracted knowledge.

    Attributes:
        id: UUID7 string primary key
        document_id: Id of the source document
        type: GUIDELINE, RECOMMENDATION, PROCEDURE, DEFINITION,
            INTERACTION or CONTRAINDICATION
        title: Short title
        content: Full text (markdown)
        summary: Optional short summary
        keywords: List of keywords
        category: Clinical area (e.g., "Cardiology")
        severity: LOW..CRITICAL
        evidence: {"level": "A".."D", "source": "..."}
        references: [{"document_id", "section"?, "page_number"?}]
        related_units: Ids of related knowledge units
        extra_data: Additional flexible metadata
    """

    document_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Id of the source document",
    )

    type: Mapped[KnowledgeUnitType] = mapped_column(
        enum_column(KnowledgeUnitType),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(512), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    summary: Mapped[str | None] = mapped_column(Text, nullable=True)

    keywords: Mapped[list | None] = mapped_column(JSONType, nullable=True)

    category: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        index=True,
        comment="Clinical area",
    )

    severity: Mapped[Severity | None] = mapped_column(enum_column(Severity), nullable=True)

    evidence: Mapped[dict | None] = mapped_column(
        JSONType,
        nullable=True,
        comment="Evidence grading {level, source}",
    )

    references: Mapped[list | None] = mapped_column(JSONType, nullable=True)

    related_units: Mapped[list | None] = mapped_column(JSONType, nullable=True)

    extra_data: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    def __repr__(self) -> str:
        return f"<KnowledgeUnit(id={self.id!r}, type={self.type}, title={self.title[:50]!r})>"


Index("ix_knowledge_units_created_at", KnowledgeUnit.created_at.desc())
