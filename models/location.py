import uuid

from sqlalchemy import (
    Column, Text, Boolean, Float, DateTime, ForeignKey, Enum, Index, UniqueConstraint, Uuid, text,
)
from sqlalchemy.orm import relationship

from database.postgres import Base
from models.audit import TimestampMixin, JSONType, utcnow
from store.enums import LocationAdminRole, enum_values


class BusinessLocation(TimestampMixin, Base):
    __tablename__ = "business_locations"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    registration_id = Column(
        Uuid,
        ForeignKey("business_registration_requests.id", ondelete="CASCADE"),
        nullable=False,
    )
    business_id = Column(Uuid, nullable=True)
    label = Column(Text, nullable=False)
    formatted_address = Column(Text, nullable=False)
    street = Column(Text, nullable=True)
    city = Column(Text, nullable=True)
    state_region = Column(Text, nullable=True)
    postal_code = Column(Text, nullable=True)
    country = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    google_place_id = Column(Text, nullable=True)
    timezone = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    is_primary = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    extra_metadata = Column("metadata", JSONType, nullable=False, default=dict)

    registration = relationship("BusinessRegistrationRequest", back_populates="locations")
    promotions = relationship(
        "BusinessPromotion",
        secondary="business_promotion_locations",
        back_populates="locations",
    )
    admins = relationship("LocationAdmin", back_populates="location", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_business_locations_registration_id", "registration_id"),
        # Only one primary location per registration
        Index(
            "idx_business_locations_primary_unique",
            "registration_id",
            unique=True,
            postgresql_where=text("is_primary"),
            sqlite_where=text("is_primary = 1"),
        ),
    )


class LocationAdmin(TimestampMixin, Base):
    """Grants a user a role over one location. Removal flips is_active."""
    __tablename__ = "business_location_admins"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    location_id = Column(Uuid, ForeignKey("business_locations.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Uuid, nullable=False, index=True)
    user_email = Column(Text, nullable=False)
    user_username = Column(Text, nullable=False)
    role = Column(
        Enum(LocationAdminRole, name="location_admin_role", values_callable=enum_values),
        nullable=False,
        default=LocationAdminRole.STAFF,
    )
    granted_by = Column(Uuid, nullable=True)
    granted_by_username = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    granted_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    location = relationship("BusinessLocation", back_populates="admins")

    __table_args__ = (UniqueConstraint("location_id", "user_id", name="unique_location_user"),)
