from datetime import timedelta
from typing import List
from uuid import UUID, uuid4
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, PersistenceError
from models.audit import utcnow
from models.location import BusinessLocation
from models.registration import BusinessRegistrationRequest
from schemas.location import LocationCreate
from schemas.registration import RegistrationCreate
from store.enums import VerificationStatus
from store.repositories import RegistrationRepository

logger = logging.getLogger(__name__)


def _primary_index(locations: List[LocationCreate]) -> int:
    """First location flagged primary, or the first location when none is."""
    for index, location in enumerate(locations):
        if location.is_primary:
            return index
    return 0


async def submit_registration(
    request: RegistrationCreate,
    db: Session,
    registration_repo: RegistrationRepository,
) -> BusinessRegistrationRequest:
    """
    Store a new registration in ``pending`` together with its locations.

    Without explicit locations a single primary location is derived from the
    registration name and address.
    """
    now = utcnow()
    locations = request.locations or [
        LocationCreate(label=request.name, formatted_address=request.address, is_primary=True)
    ]
    primary_index = _primary_index(locations)

    registration = BusinessRegistrationRequest(
        id=uuid4(),
        user_id=request.user_id,
        name=request.name,
        category=request.category,
        address=request.address,
        description=request.description,
        phone=request.phone,
        website=request.website,
        tax_id=request.tax_id,
        document_urls=[url.strip() for url in request.document_urls],
        is_multi_user_team=request.is_multi_user_team,
        status=VerificationStatus.PENDING,
        owner_email=str(request.owner_email),
        owner_username=request.owner_username,
        submitted_at=now,
        updated_at=now,
    )

    for index, location in enumerate(locations):
        # Offset creation times so submission order survives ordering by created_at
        created_at = now + timedelta(microseconds=index)
        registration.locations.append(
            BusinessLocation(
                id=uuid4(),
                **location.model_dump(exclude={"is_primary", "metadata"}),
                is_primary=index == primary_index,
                extra_metadata=location.metadata or {},
                created_at=created_at,
                updated_at=created_at,
            )
        )

    try:
        db.add(registration)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to submit registration for user {request.user_id}: {str(e)}")
        raise PersistenceError()

    logger.info(
        f"Registration {registration.id} submitted by user {request.user_id} "
        f"with {len(locations)} location(s)"
    )
    return registration


async def get_registration(
    registration_id: UUID,
    registration_repo: RegistrationRepository,
) -> BusinessRegistrationRequest:
    registration = registration_repo.get_with_locations(registration_id)
    if not registration:
        raise NotFoundError(f"Registration {registration_id} not found")
    return registration


async def get_latest_registration_for_user(
    user_id: UUID,
    registration_repo: RegistrationRepository,
) -> BusinessRegistrationRequest:
    registration = registration_repo.get_latest_for_user(user_id)
    if not registration:
        raise NotFoundError(f"No registration found for user {user_id}")
    return registration


async def list_registrations_for_user(
    user_id: UUID,
    registration_repo: RegistrationRepository,
) -> List[BusinessRegistrationRequest]:
    return registration_repo.list_for_user(user_id)
