from sqlalchemy import Column, DateTime, JSON, event
from sqlalchemy.dialects.postgresql import JSONB
from datetime import datetime, timezone


# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """
    Mixin class that provides automatic timestamp fields for database models.

    Automatically tracks:
    - created_at: Timestamp when the record was created
    - updated_at: Timestamp when the record was last updated

    Usage:
        class MyModel(TimestampMixin, Base):
            __tablename__ = "my_table"
            id = Column(Uuid, primary_key=True)
            # ... other fields

    The fields are populated by SQLAlchemy event listeners below.
    """
    __tablename__ = None

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        comment="Timestamp when this record was created"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        comment="Timestamp when this record was last updated"
    )


@event.listens_for(TimestampMixin, "before_insert", propagate=True)
def receive_before_insert(mapper, connection, target):
    """
    Set created_at and updated_at before inserting a new record.

    Values already set explicitly in service code are kept.
    """
    now = utcnow()
    if not target.created_at:
        target.created_at = now
    if not target.updated_at:
        target.updated_at = target.created_at


@event.listens_for(TimestampMixin, "before_update", propagate=True)
def receive_before_update(mapper, connection, target):
    """Bump updated_at on every flushed update."""
    target.updated_at = utcnow()
