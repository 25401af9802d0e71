from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from store.enums import ReviewAction


class ReviewActionRequest(BaseModel):
    action: ReviewAction
    notes: Optional[str] = Field(default=None, max_length=4000)
    rejection_reason: Optional[str] = Field(default=None, max_length=2000)
    reviewer_id: Optional[UUID] = None
    reviewer_name: Optional[str] = Field(default=None, max_length=120)


class ReviewEventResponse(BaseModel):
    id: UUID
    registration_id: UUID
    reviewer_id: Optional[UUID] = None
    reviewer_name: Optional[str] = None
    action: ReviewAction
    notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ReviewStatsResponse(BaseModel):
    pending: int = 0
    under_review: int = 0
    approved_today: int = 0
    rejected_today: int = 0
