from datetime import datetime, timezone
from typing import Optional

from pydantic import AliasChoices, Field


def metadata_field():
    """
    ORM models keep JSON metadata on ``extra_metadata`` since ``metadata`` is
    taken by the declarative base. ``extra_metadata`` must be tried first.
    """
    return Field(
        default_factory=dict,
        validation_alias=AliasChoices("extra_metadata", "metadata"),
    )


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def reject_null(value):
    """Partial updates may omit a NOT NULL column but never send it as null."""
    if value is None:
        raise ValueError("may not be null")
    return value
