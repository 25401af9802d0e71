from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime
from uuid import UUID

from schemas.common import metadata_field, reject_null


class BusinessUpdate(BaseModel):
    business_name: Optional[str] = Field(default=None, min_length=3, max_length=120)
    category: Optional[str] = Field(default=None, min_length=3, max_length=120)
    tax_id: Optional[str] = Field(default=None, min_length=4, max_length=64)
    description: Optional[str] = Field(default=None, max_length=2000)
    website: Optional[str] = None
    logo_url: Optional[str] = Field(default=None, max_length=1024)
    is_active: Optional[bool] = None

    @field_validator("business_name", "category", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class BusinessResponse(BaseModel):
    id: UUID
    registration_id: Optional[UUID] = None
    owner_user_id: UUID
    business_name: str
    category: str
    tax_id: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    is_active: bool
    metadata: Dict[str, Any] = metadata_field()
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
