"""
Document model for curated clinical source documents.

Documents are guidelines, SPC/PIL leaflets, procedures and articles
harvested from a DataSource. Knowledge units are extracted from them by
the external pipeline.

Key features:
- Belongs to exactly one DataSource
- JSON lists for authors, categories and tags
- Soft lifecycle through ``status`` (only ACTIVE rows are listed/searched)
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, JSONType, StringIDMixin, TimestampMixin, enum_column
from src.db.enums import DocumentStatus, DocumentType, Language


class Document(StringIDMixin, TimestampMixin, Base):
    """
    A source document in the knowledge base.

    Attributes:
        id: UUID7 string primary key
        data_source_id: Owning DataSource
        source_id: Identifier of the document at its source (optional)
        title: Document title
        description: Abstract or short description
        url: Canonical page URL
        download_url: Direct file URL (PDF etc.)
        document_type: GUIDELINE, SPC, PIL, PROCEDURE, ARTICLE, OTHER
        language: cs or en
        published_date: Publication date at the source
        version: Version label at the source
        authors: List of author names
        categories: List of category labels
        tags: List of free tags
        content_hash: Hash of the downloaded content for change detection
        status: ACTIVE, ARCHIVED, DELETED

    Example:
        document = Document(
            data_source_id=1,
            title="Doporučený postup: arteriální hypertenze",
            url="https://example.org/guideline.pdf",
            document_type=DocumentType.GUIDELINE,
        )
    """

    # === Core Fields ===
    data_source_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("data_sources.id"),
        nullable=False,
        index=True,
    )

    source_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Identifier of the document at its source",
    )

    title: Mapped[str] = mapped_column(String(512), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    download_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    document_type: Mapped[DocumentType] = mapped_column(
        enum_column(DocumentType),
        nullable=False,
    )

    language: Mapped[Language] = mapped_column(
        enum_column(Language),
        nullable=False,
        default=Language.CS,
    )

    # === Metadata Fields ===
    published_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    version: Mapped[str | None] = mapped_column(String(50), nullable=True)

    authors: Mapped[list | None] = mapped_column(JSONType, nullable=True)

    categories: Mapped[list | None] = mapped_column(JSONType, nullable=True)

    tags: Mapped[list | None] = mapped_column(JSONType, nullable=True)

    content_hash: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        comment="Hash of downloaded content for change detection",
    )

    status: Mapped[DocumentStatus] = mapped_column(
        enum_column(DocumentStatus),
        nullable=False,
        default=DocumentStatus.ACTIVE,
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id!r}, title={self.title[:50]!r})>"


# === Indexes ===
# Listing filters on status and sorts by recency
Index("ix_documents_status_created_at", Document.status, Document.created_at.desc())
