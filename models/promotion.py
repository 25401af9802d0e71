import uuid

from sqlalchemy import (
    Column, Text, Boolean, Integer, DateTime, ForeignKey, Enum, Index, Table, Uuid, CheckConstraint,
)
from sqlalchemy.orm import relationship

from database.postgres import Base
from models.audit import TimestampMixin, JSONType
from store.enums import PromotionType, PromotionScope, PromotionStatus, enum_values

promotion_locations = Table(
    "business_promotion_locations",
    Base.metadata,
    Column("promotion_id", Uuid, ForeignKey("business_promotions.id", ondelete="CASCADE"), primary_key=True),
    Column("location_id", Uuid, ForeignKey("business_locations.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_promotion_locations_location", "location_id"),
)


class BusinessPromotion(TimestampMixin, Base):
    __tablename__ = "business_promotions"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    registration_id = Column(
        Uuid,
        ForeignKey("business_registration_requests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(Text, nullable=False)
    subtitle = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    promotion_type = Column(
        Enum(PromotionType, name="business_promotion_type", values_callable=enum_values),
        nullable=False,
    )
    scope = Column(
        Enum(PromotionScope, name="business_promotion_scope", values_callable=enum_values),
        nullable=False,
        default=PromotionScope.BUSINESS,
    )
    status = Column(
        Enum(PromotionStatus, name="business_promotion_status", values_callable=enum_values),
        nullable=False,
        default=PromotionStatus.DRAFT,
    )
    image_url = Column(Text, nullable=True)
    prize = Column(Text, nullable=True)
    reward_points = Column(Integer, nullable=False, default=0)
    discount_percent = Column(Integer, nullable=True)
    max_claims = Column(Integer, nullable=True)
    per_user_limit = Column(Integer, nullable=True)
    total_claims = Column(Integer, nullable=False, default=0)
    requires_check_in = Column(Boolean, nullable=False, default=False)
    requires_purchase = Column(Boolean, nullable=False, default=False)
    terms = Column(Text, nullable=True)
    extra_metadata = Column("metadata", JSONType, nullable=False, default=dict)
    starts_at = Column(DateTime(timezone=True), nullable=False)
    ends_at = Column(DateTime(timezone=True), nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(Uuid, nullable=True)
    updated_by = Column(Uuid, nullable=True)

    registration = relationship("BusinessRegistrationRequest", back_populates="promotions")
    locations = relationship(
        "BusinessLocation",
        secondary=promotion_locations,
        back_populates="promotions",
        order_by="BusinessLocation.created_at",
    )

    __table_args__ = (
        Index("idx_business_promotions_schedule", "starts_at", "ends_at"),
        CheckConstraint("ends_at > starts_at", name="business_promotions_schedule_check"),
        CheckConstraint(
            "discount_percent IS NULL OR (discount_percent >= 0 AND discount_percent <= 100)",
            name="business_promotions_discount_check",
        ),
    )
