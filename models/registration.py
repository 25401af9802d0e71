import uuid

from sqlalchemy import Column, Text, Boolean, DateTime, ForeignKey, Enum, Index, Uuid, event
from sqlalchemy.orm import relationship

from database.postgres import Base
from models.audit import JSONType, utcnow
from store.enums import VerificationStatus, ReviewAction, enum_values


class BusinessRegistrationRequest(Base):
    __tablename__ = "business_registration_requests"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    business_id = Column(Uuid, nullable=True)
    name = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    address = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    website = Column(Text, nullable=True)
    tax_id = Column(Text, nullable=True)
    document_urls = Column(JSONType, nullable=False, default=list)
    is_multi_user_team = Column(Boolean, nullable=False, default=False)
    status = Column(
        Enum(VerificationStatus, name="business_verification_status", values_callable=enum_values),
        nullable=False,
        default=VerificationStatus.PENDING,
        index=True,
    )
    owner_email = Column(Text, nullable=False)
    owner_username = Column(Text, nullable=False)
    rejection_reason = Column(Text, nullable=True)
    reviewer_notes = Column(Text, nullable=True)
    reviewer_id = Column(Uuid, nullable=True)
    reviewer_name = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    locations = relationship(
        "BusinessLocation",
        back_populates="registration",
        cascade="all, delete-orphan",
        order_by="BusinessLocation.created_at",
    )
    review_events = relationship(
        "ReviewEvent",
        back_populates="registration",
        cascade="all, delete-orphan",
        order_by="ReviewEvent.created_at",
    )
    promotions = relationship("BusinessPromotion", back_populates="registration", cascade="all, delete-orphan")


class ReviewEvent(Base):
    """Append-only audit record of one reviewer action."""
    __tablename__ = "business_review_events"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    registration_id = Column(
        Uuid,
        ForeignKey("business_registration_requests.id", ondelete="CASCADE"),
        nullable=False,
    )
    reviewer_id = Column(Uuid, nullable=True)
    reviewer_name = Column(Text, nullable=True)
    action = Column(Enum(ReviewAction, name="business_review_action", values_callable=enum_values), nullable=False)
    notes = Column(Text, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    registration = relationship("BusinessRegistrationRequest", back_populates="review_events")

    __table_args__ = (
        Index("idx_review_events_registration_created", "registration_id", "created_at"),
    )


@event.listens_for(ReviewEvent, "before_update")
def reject_review_event_update(mapper, connection, target):
    raise ValueError("Review events are append-only and cannot be modified")
