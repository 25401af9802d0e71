"""
Repositories for registration requests and their review history.
"""
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from models.registration import BusinessRegistrationRequest, ReviewEvent
from store.enums import VerificationStatus, ReviewAction
from store.repositories.base import BaseRepository

PENDING_STATUSES = (VerificationStatus.PENDING, VerificationStatus.UNDER_REVIEW)


class RegistrationRepository(BaseRepository[BusinessRegistrationRequest]):
    """Repository for BusinessRegistrationRequest model"""

    def __init__(self, db: Session):
        super().__init__(BusinessRegistrationRequest, db)

    def get_with_locations(self, registration_id: UUID) -> Optional[BusinessRegistrationRequest]:
        return (
            self.db.query(BusinessRegistrationRequest)
            .options(selectinload(BusinessRegistrationRequest.locations))
            .filter(BusinessRegistrationRequest.id == registration_id)
            .first()
        )

    def get_latest_for_user(self, user_id: UUID) -> Optional[BusinessRegistrationRequest]:
        """Most recently submitted registration of a user"""
        return (
            self.db.query(BusinessRegistrationRequest)
            .filter(BusinessRegistrationRequest.user_id == user_id)
            .order_by(BusinessRegistrationRequest.submitted_at.desc())
            .first()
        )

    def list_for_user(self, user_id: UUID) -> List[BusinessRegistrationRequest]:
        return (
            self.db.query(BusinessRegistrationRequest)
            .options(selectinload(BusinessRegistrationRequest.locations))
            .filter(BusinessRegistrationRequest.user_id == user_id)
            .order_by(BusinessRegistrationRequest.submitted_at.desc())
            .all()
        )

    def list_pending(self, limit: int, offset: int) -> List[BusinessRegistrationRequest]:
        """Registrations waiting on a reviewer, oldest submission first"""
        return (
            self.db.query(BusinessRegistrationRequest)
            .options(selectinload(BusinessRegistrationRequest.locations))
            .filter(BusinessRegistrationRequest.status.in_(PENDING_STATUSES))
            .order_by(BusinessRegistrationRequest.submitted_at.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_pending(self) -> int:
        return (
            self.db.query(func.count(BusinessRegistrationRequest.id))
            .filter(BusinessRegistrationRequest.status.in_(PENDING_STATUSES))
            .scalar()
        )

    def count_by_status(self) -> Dict[VerificationStatus, int]:
        rows = (
            self.db.query(BusinessRegistrationRequest.status, func.count(BusinessRegistrationRequest.id))
            .group_by(BusinessRegistrationRequest.status)
            .all()
        )
        return {status: total for status, total in rows}

    def count_updated_since(self, status: VerificationStatus, since: datetime) -> int:
        return (
            self.db.query(func.count(BusinessRegistrationRequest.id))
            .filter(
                BusinessRegistrationRequest.status == status,
                BusinessRegistrationRequest.updated_at >= since,
            )
            .scalar()
        )


class ReviewEventRepository(BaseRepository[ReviewEvent]):
    """Append-only access to the review audit trail."""

    def __init__(self, db: Session):
        super().__init__(ReviewEvent, db)

    def record(
        self,
        *,
        registration_id: UUID,
        action: ReviewAction,
        reviewer_id: Optional[UUID],
        reviewer_name: Optional[str],
        notes: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> ReviewEvent:
        review_event = ReviewEvent(
            registration_id=registration_id,
            action=action,
            reviewer_id=reviewer_id,
            reviewer_name=reviewer_name,
            notes=notes,
            rejection_reason=rejection_reason,
        )
        self.db.add(review_event)
        self.db.flush()
        return review_event

    def list_for_registration(self, registration_id: UUID) -> List[ReviewEvent]:
        """Review history, oldest first"""
        return (
            self.db.query(ReviewEvent)
            .filter(ReviewEvent.registration_id == registration_id)
            .order_by(ReviewEvent.created_at.asc())
            .all()
        )

    def count_for_registration(self, registration_id: UUID) -> int:
        return self.count(registration_id=registration_id)
