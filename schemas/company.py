from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from uuid import UUID

from schemas.common import metadata_field, reject_null


class CompanyCreate(BaseModel):
    company_name: str = Field(..., min_length=3, max_length=120)
    tax_id: Optional[str] = Field(default=None, min_length=4, max_length=64)
    legal_entity_type: Optional[str] = Field(default=None, max_length=60)
    metadata: Optional[Dict[str, Any]] = None


class CompanyUpdate(BaseModel):
    company_name: Optional[str] = Field(default=None, min_length=3, max_length=120)
    tax_id: Optional[str] = Field(default=None, min_length=4, max_length=64)
    legal_entity_type: Optional[str] = Field(default=None, max_length=60)
    is_active: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("company_name", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class UnitCreate(BaseModel):
    unit_name: str = Field(..., min_length=2, max_length=120)
    category: str = Field(..., min_length=3, max_length=120)
    registration_id: Optional[UUID] = None
    business_id: Optional[UUID] = None
    is_primary: bool = False
    metadata: Optional[Dict[str, Any]] = None


class UnitUpdate(BaseModel):
    unit_name: Optional[str] = Field(default=None, min_length=2, max_length=120)
    category: Optional[str] = Field(default=None, min_length=3, max_length=120)
    registration_id: Optional[UUID] = None
    business_id: Optional[UUID] = None
    is_primary: Optional[bool] = None
    is_active: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("unit_name", "category", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class UnitResponse(BaseModel):
    id: UUID
    company_id: UUID
    registration_id: Optional[UUID] = None
    business_id: Optional[UUID] = None
    unit_name: str
    category: str
    is_primary: bool
    is_active: bool
    metadata: Dict[str, Any] = metadata_field()
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CompanyResponse(BaseModel):
    id: UUID
    owner_user_id: UUID
    company_name: str
    tax_id: Optional[str] = None
    legal_entity_type: Optional[str] = None
    is_active: bool
    metadata: Dict[str, Any] = metadata_field()
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CompanyWithUnitsResponse(CompanyResponse):
    units: List[UnitResponse] = []
