"""
Location management.

Every write that can make a location primary locks the parent registration,
clears the flag on the siblings and only then flags the target, all inside
one transaction. A registration therefore never has two primary locations,
and it keeps at least one location at all times.
"""
from typing import Any, Dict, List
from uuid import UUID, uuid4
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ServiceError,
    ValidationError,
)
from models.audit import utcnow
from models.location import BusinessLocation, LocationAdmin
from models.registration import BusinessRegistrationRequest
from schemas.location import LocationAdminCreate, LocationCreate, LocationUpdate
from store.repositories import (
    LocationAdminRepository,
    LocationRepository,
    RegistrationRepository,
)

logger = logging.getLogger(__name__)


def _column_values(data: Dict[str, Any]) -> Dict[str, Any]:
    if "metadata" in data:
        data["extra_metadata"] = data.pop("metadata") or {}
    return data


def _lock_registration(registration_id: UUID, registration_repo: RegistrationRepository) -> BusinessRegistrationRequest:
    registration = registration_repo.lock_by_id(registration_id)
    if not registration:
        raise NotFoundError(f"Registration {registration_id} not found")
    return registration


def _get_location_or_404(
    registration_id: UUID, location_id: UUID, location_repo: LocationRepository
) -> BusinessLocation:
    location = location_repo.get_for_registration(registration_id, location_id)
    if not location:
        raise NotFoundError(f"Location {location_id} not found for registration {registration_id}")
    return location


def _make_primary(location: BusinessLocation, location_repo: LocationRepository) -> None:
    location_repo.clear_primary(location.registration_id, keep_location_id=location.id)
    location.is_primary = True


async def create_location(
    registration_id: UUID,
    request: LocationCreate,
    db: Session,
    registration_repo: RegistrationRepository,
    location_repo: LocationRepository,
) -> BusinessLocation:
    """New locations become primary when flagged or when the registration has none."""
    try:
        registration = _lock_registration(registration_id, registration_repo)

        location_id = uuid4()
        make_primary = request.is_primary or location_repo.get_primary(registration_id) is None
        if make_primary:
            location_repo.clear_primary(registration_id, keep_location_id=location_id)

        location = BusinessLocation(
            id=location_id,
            registration_id=registration_id,
            business_id=registration.business_id,
            is_primary=make_primary,
            **_column_values(request.model_dump(exclude={"is_primary"})),
        )
        db.add(location)
        registration.updated_at = utcnow()
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create location for registration {registration_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Location {location.id} created for registration {registration_id} (primary={make_primary})")
    return location


async def list_locations(
    registration_id: UUID,
    registration_repo: RegistrationRepository,
    location_repo: LocationRepository,
) -> List[BusinessLocation]:
    if not registration_repo.exists(id=registration_id):
        raise NotFoundError(f"Registration {registration_id} not found")
    return location_repo.list_for_registration(registration_id)


async def get_location(
    registration_id: UUID,
    location_id: UUID,
    location_repo: LocationRepository,
) -> BusinessLocation:
    return _get_location_or_404(registration_id, location_id, location_repo)


async def update_location(
    registration_id: UUID,
    location_id: UUID,
    request: LocationUpdate,
    db: Session,
    registration_repo: RegistrationRepository,
    location_repo: LocationRepository,
) -> BusinessLocation:
    """
    Apply a partial update.

    Unsetting ``is_primary`` on the current primary is refused: another
    location has to be promoted instead.
    """
    data = request.model_dump(exclude_unset=True)
    is_primary = data.pop("is_primary", None)

    try:
        registration = _lock_registration(registration_id, registration_repo)
        location = _get_location_or_404(registration_id, location_id, location_repo)

        if is_primary is False and location.is_primary:
            raise ConflictError(
                "A registration must keep a primary location; promote another location instead"
            )
        if is_primary and not location.is_primary:
            _make_primary(location, location_repo)

        for field, value in _column_values(data).items():
            setattr(location, field, value)
        registration.updated_at = utcnow()
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update location {location_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Location {location_id} updated for registration {registration_id}")
    return location


async def set_primary_location(
    registration_id: UUID,
    location_id: UUID,
    db: Session,
    registration_repo: RegistrationRepository,
    location_repo: LocationRepository,
) -> BusinessLocation:
    try:
        registration = _lock_registration(registration_id, registration_repo)
        location = _get_location_or_404(registration_id, location_id, location_repo)
        if not location.is_primary:
            _make_primary(location, location_repo)
            registration.updated_at = utcnow()
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to set primary location {location_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Location {location_id} is now primary for registration {registration_id}")
    return location


async def delete_location(
    registration_id: UUID,
    location_id: UUID,
    db: Session,
    registration_repo: RegistrationRepository,
    location_repo: LocationRepository,
) -> None:
    """
    Delete a location. The last location of a registration cannot be removed;
    removing the primary promotes the oldest remaining location.
    """
    try:
        registration = _lock_registration(registration_id, registration_repo)
        location = _get_location_or_404(registration_id, location_id, location_repo)

        if location_repo.count_for_registration(registration_id) <= 1:
            raise ValidationError("at least one location required", field="location_id")

        was_primary = location.is_primary
        location_repo.delete(location)

        if was_primary:
            successor = location_repo.get_earliest(registration_id)
            successor.is_primary = True
            logger.info(f"Location {successor.id} promoted to primary for registration {registration_id}")

        registration.updated_at = utcnow()
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete location {location_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Location {location_id} deleted from registration {registration_id}")


async def add_location_admin(
    registration_id: UUID,
    location_id: UUID,
    request: LocationAdminCreate,
    current_actor: dict,
    db: Session,
    location_repo: LocationRepository,
    admin_repo: LocationAdminRepository,
) -> LocationAdmin:
    """Grant a user a role on a location. An existing grant is refreshed and reactivated."""
    location = _get_location_or_404(registration_id, location_id, location_repo)
    now = utcnow()

    try:
        admin = admin_repo.get_grant(location.id, request.user_id)
        if admin is None:
            admin = LocationAdmin(location_id=location.id, user_id=request.user_id)
            db.add(admin)

        admin.user_email = str(request.user_email)
        admin.user_username = request.user_username
        admin.role = request.role
        admin.granted_by = current_actor["user_id"]
        admin.granted_by_username = current_actor.get("username")
        admin.is_active = True
        admin.granted_at = now
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to grant user {request.user_id} on location {location_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"User {request.user_id} granted {request.role.value} on location {location_id}")
    return admin


async def list_location_admins(
    registration_id: UUID,
    location_id: UUID,
    location_repo: LocationRepository,
    admin_repo: LocationAdminRepository,
) -> List[LocationAdmin]:
    location = _get_location_or_404(registration_id, location_id, location_repo)
    return admin_repo.list_active(location.id)


async def remove_location_admin(
    registration_id: UUID,
    location_id: UUID,
    user_id: UUID,
    db: Session,
    location_repo: LocationRepository,
    admin_repo: LocationAdminRepository,
) -> None:
    location = _get_location_or_404(registration_id, location_id, location_repo)
    admin = admin_repo.get_grant(location.id, user_id)
    if admin is None or not admin.is_active:
        raise NotFoundError(f"User {user_id} is not an admin of location {location_id}")

    try:
        admin.is_active = False
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to revoke user {user_id} on location {location_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"User {user_id} removed from location {location_id}")
