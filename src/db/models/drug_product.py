"""
DrugProduct model for registered medicinal products.

Rows mirror the SÚKL product registry: one row per registered product
(name + strength + form), keyed by the registry's own SÚKL code.
"""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, JSONType, StringIDMixin, TimestampMixin, enum_column
from src.db.enums import DrugProductStatus


class DrugProduct(StringIDMixin, TimestampMixin, Base):
    """
    A registered drug product.

    Attributes:
        id: UUID7 string primary key
        sukl_id: SÚKL registry code (unique)
        name: Product name
        generic_name: International non-proprietary name
        active_ingredients: [{"name", "strength", "unit"}]
        dosage_form: e.g. "tablet"
        strength: e.g. "100mg"
        route: Route of administration
        atc_code: Anatomical Therapeutic Chemical code
        manufacturer: Marketing authorisation holder
        registration_number: Registration number
        registration_date: Date of registration
        spc_url: Summary of Product Characteristics URL
        pil_url: Patient Information Leaflet URL
        status: ACTIVE, INACTIVE, WITHDRAWN
    """

    sukl_id: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        comment="SÚKL registry code",
    )

    name: Mapped[str] = mapped_column(String(512), nullable=False, index=True)

    generic_name: Mapped[str | None] = mapped_column(String(512), nullable=True)

    active_ingredients: Mapped[list | None] = mapped_column(JSONType, nullable=True)

    dosage_form: Mapped[str | None] = mapped_column(String(255), nullable=True)

    strength: Mapped[str | None] = mapped_column(String(255), nullable=True)

    route: Mapped[str | None] = mapped_column(String(255), nullable=True)

    atc_code: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)

    manufacturer: Mapped[str | None] = mapped_column(String(512), nullable=True)

    registration_number: Mapped[str | None] = mapped_column(String(50), nullable=True)

    registration_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    spc_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    pil_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    status: Mapped[DrugProductStatus] = mapped_column(
        enum_column(DrugProductStatus),
        nullable=False,
        default=DrugProductStatus.ACTIVE,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<DrugProduct(sukl_id={self.sukl_id!r}, name={self.name!r})>"
