"""
DrugInteraction model for pairwise drug-drug interactions.

The pair (drug1_id, drug2_id) is unordered: an interaction between A and B
is found when looking up either A or B.
"""

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, JSONType, StringIDMixin, TimestampMixin, enum_column
from src.db.enums import InteractionType, Severity


class DrugInteraction(StringIDMixin, TimestampMixin, Base):
    """
    An interaction between two drug products.

    Attributes:
        id: UUID7 string primary key
        drug1_id: One side of the pair (DrugProduct id)
        drug2_id: Other side of the pair (DrugProduct id)
        interaction_type: CONTRAINDICATION, CAUTION, INTERACTION, MONITORING
        severity: LOW..CRITICAL
        mechanism: Pharmacological mechanism
        clinical_effect: Expected clinical effect
        management: Recommended management
        evidence: {"level": "A".."D", "source": "..."}
        references: [{"document_id", "url"?}]
    """

    drug1_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    drug2_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    interaction_type: Mapped[InteractionType] = mapped_column(
        enum_column(InteractionType),
        nullable=False,
    )

    severity: Mapped[Severity] = mapped_column(enum_column(Severity), nullable=False)

    mechanism: Mapped[str | None] = mapped_column(Text, nullable=True)

    clinical_effect: Mapped[str | None] = mapped_column(Text, nullable=True)

    management: Mapped[str | None] = mapped_column(Text, nullable=True)

    evidence: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    references: Mapped[list | None] = mapped_column(JSONType, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<DrugInteraction(drug1={self.drug1_id!r}, drug2={self.drug2_id!r}, "
            f"severity={self.severity})>"
        )


Index("ix_drug_interactions_pair", DrugInteraction.drug1_id, DrugInteraction.drug2_id)
