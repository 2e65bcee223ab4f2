"""
DataSource model for the registries and publishers feeding the knowledge base.

A data source is e.g. the SÚKL open-data registry or a medical society's
guideline site. Documents and ETL jobs reference it. Sources are never
hard-deleted; ``is_active`` retires them from listings.
"""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, JSONType, TimestampMixin, enum_column
from src.db.enums import SourceType


class DataSource(TimestampMixin, Base):
    """
    An upstream source of reference data.

    Attributes:
        id: Auto-increment integer primary key
        name: Display name (e.g., "SÚKL")
        description: Free-text description
        source_type: Registry family (SUKL, NIKEZ, WIKISKRIPTA, OTHER)
        url: Public landing page
        api_endpoint: Machine-readable endpoint, if any
        scraping_config: Free-form settings for the external scraper
        is_active: False once the source is retired
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        sort_order=-100,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    source_type: Mapped[SourceType] = mapped_column(
        enum_column(SourceType),
        nullable=False,
        index=True,
        comment="Registry family",
    )

    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    api_endpoint: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    scraping_config: Mapped[dict | None] = mapped_column(
        JSONType,
        nullable=True,
        comment="Free-form configuration for the external scraper",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<DataSource(id={self.id}, name={self.name!r}, type={self.source_type})>"
