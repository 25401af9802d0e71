from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from uuid import UUID

from schemas.common import metadata_field, reject_null
from store.enums import LocationAdminRole


class LocationCreate(BaseModel):
    label: str = Field(..., min_length=2, max_length=120)
    formatted_address: str = Field(..., min_length=5)
    street: Optional[str] = None
    city: Optional[str] = None
    state_region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    google_place_id: Optional[str] = None
    timezone: Optional[str] = None
    phone: Optional[str] = None
    is_primary: bool = False
    notes: Optional[str] = Field(default=None, max_length=2000)
    metadata: Optional[Dict[str, Any]] = None


class LocationUpdate(BaseModel):
    """Partial update. Only fields present in the request body are applied."""
    label: Optional[str] = Field(default=None, min_length=2, max_length=120)
    formatted_address: Optional[str] = Field(default=None, min_length=5)
    street: Optional[str] = None
    city: Optional[str] = None
    state_region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    google_place_id: Optional[str] = None
    timezone: Optional[str] = None
    phone: Optional[str] = None
    is_primary: Optional[bool] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("label", "formatted_address")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class LocationResponse(BaseModel):
    id: UUID
    registration_id: UUID
    business_id: Optional[UUID] = None
    label: str
    formatted_address: str
    street: Optional[str] = None
    city: Optional[str] = None
    state_region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    google_place_id: Optional[str] = None
    timezone: Optional[str] = None
    phone: Optional[str] = None
    is_primary: bool
    notes: Optional[str] = None
    metadata: Dict[str, Any] = metadata_field()
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LocationAdminCreate(BaseModel):
    user_id: UUID
    user_email: EmailStr
    user_username: str = Field(..., min_length=3, max_length=60)
    role: LocationAdminRole = LocationAdminRole.STAFF


class LocationAdminResponse(BaseModel):
    id: UUID
    location_id: UUID
    user_id: UUID
    user_email: str
    user_username: str
    role: LocationAdminRole
    granted_by: Optional[UUID] = None
    granted_by_username: Optional[str] = None
    is_active: bool
    granted_at: datetime

    class Config:
        from_attributes = True


class LocationWithAdminsResponse(BaseModel):
    location: LocationResponse
    admins: List[LocationAdminResponse] = []
