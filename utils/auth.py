from typing import Optional
from uuid import UUID

from fastapi import Header
import logging

from core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _parse_actor_id(raw: Optional[str]) -> UUID:
    if not raw or not raw.strip():
        raise ValidationError("X-Actor-Id header is required", field="X-Actor-Id")
    try:
        return UUID(raw.strip())
    except ValueError:
        raise ValidationError("X-Actor-Id must be a valid UUID", field="X-Actor-Id")


async def get_current_actor(
    x_actor_id: Optional[str] = Header(None),
    x_actor_name: Optional[str] = Header(None),
) -> dict:
    """Identify the caller from the actor headers set by the upstream gateway."""
    actor_id = _parse_actor_id(x_actor_id)
    if not x_actor_name or not x_actor_name.strip():
        raise ValidationError("X-Actor-Name header is required", field="X-Actor-Name")
    return {"user_id": actor_id, "username": x_actor_name.strip()}


async def get_optional_actor(
    x_actor_id: Optional[str] = Header(None),
    x_actor_name: Optional[str] = Header(None),
) -> Optional[dict]:
    if not x_actor_id:
        return None
    return {
        "user_id": _parse_actor_id(x_actor_id),
        "username": x_actor_name.strip() if x_actor_name else None,
    }
