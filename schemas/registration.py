from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from schemas.location import LocationCreate, LocationResponse
from schemas.review import ReviewEventResponse
from store.enums import VerificationStatus


class RegistrationCreate(BaseModel):
    user_id: UUID
    name: str = Field(..., min_length=3, max_length=120)
    category: str = Field(..., min_length=3, max_length=120)
    address: str = Field(..., min_length=5)
    description: Optional[str] = Field(default=None, min_length=10, max_length=2000)
    phone: Optional[str] = None
    website: Optional[str] = None
    tax_id: Optional[str] = Field(default=None, min_length=4, max_length=64)
    document_urls: List[str] = Field(..., min_length=1)
    is_multi_user_team: bool = False
    owner_email: EmailStr
    owner_username: str = Field(..., min_length=3, max_length=60)
    locations: List[LocationCreate] = []

    @field_validator("document_urls")
    @classmethod
    def document_urls_not_blank(cls, value: List[str]) -> List[str]:
        if any(not url.strip() for url in value):
            raise ValueError("document URLs must not be blank")
        return value


class RegistrationResponse(BaseModel):
    id: UUID
    user_id: UUID
    business_id: Optional[UUID] = None
    name: str
    category: str
    address: str
    description: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    tax_id: Optional[str] = None
    document_urls: List[str] = []
    is_multi_user_team: bool = False
    status: VerificationStatus
    owner_email: str
    owner_username: str
    rejection_reason: Optional[str] = None
    reviewer_notes: Optional[str] = None
    reviewer_id: Optional[UUID] = None
    reviewer_name: Optional[str] = None
    submitted_at: datetime
    updated_at: datetime
    locations: List[LocationResponse] = []

    class Config:
        from_attributes = True


class RegistrationWithHistoryResponse(BaseModel):
    registration: RegistrationResponse
    history: List[ReviewEventResponse] = []
