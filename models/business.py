import uuid

from sqlalchemy import Column, Text, Boolean, ForeignKey, Index, Uuid, text
from sqlalchemy.orm import relationship

from database.postgres import Base
from models.audit import TimestampMixin, JSONType


class Business(TimestampMixin, Base):
    """Approved business materialised from a registration on first approval."""
    __tablename__ = "businesses"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    registration_id = Column(
        Uuid,
        ForeignKey("business_registration_requests.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )
    owner_user_id = Column(Uuid, nullable=False, index=True)
    business_name = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    tax_id = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    website = Column(Text, nullable=True)
    logo_url = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    extra_metadata = Column("metadata", JSONType, nullable=False, default=dict)


class BusinessCompany(TimestampMixin, Base):
    """Owner/parent entity grouping one or more business units."""
    __tablename__ = "business_companies"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_user_id = Column(Uuid, nullable=False, index=True)
    company_name = Column(Text, nullable=False)
    tax_id = Column(Text, nullable=True)
    legal_entity_type = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    extra_metadata = Column("metadata", JSONType, nullable=False, default=dict)
    units = relationship(
        "BusinessUnit",
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="BusinessUnit.created_at",
    )


class BusinessUnit(TimestampMixin, Base):
    __tablename__ = "business_units"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid, ForeignKey("business_companies.id", ondelete="CASCADE"), nullable=False)
    registration_id = Column(
        Uuid,
        ForeignKey("business_registration_requests.id", ondelete="SET NULL"),
        nullable=True,
    )
    business_id = Column(Uuid, unique=True, nullable=True)
    unit_name = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    is_primary = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    extra_metadata = Column("metadata", JSONType, nullable=False, default=dict)
    company = relationship("BusinessCompany", back_populates="units")

    __table_args__ = (
        Index("idx_business_units_company", "company_id"),
        # At most one primary unit per company
        Index(
            "idx_business_units_primary_unique",
            "company_id",
            unique=True,
            postgresql_where=text("is_primary"),
            sqlite_where=text("is_primary = 1"),
        ),
    )
