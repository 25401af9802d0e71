from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from uuid import UUID

from core.exceptions import ValidationError
from schemas.common import ensure_utc, metadata_field
from store.enums import PromotionType, PromotionScope, PromotionStatus


class PromotionBase(BaseModel):
    title: str = Field(..., min_length=3, max_length=120)
    subtitle: Optional[str] = Field(default=None, max_length=160)
    description: Optional[str] = Field(default=None, max_length=4000)
    promotion_type: PromotionType
    scope: PromotionScope = PromotionScope.BUSINESS
    location_ids: List[UUID] = []
    image_url: Optional[str] = Field(default=None, max_length=1024)
    prize: Optional[str] = Field(default=None, max_length=1024)
    reward_points: int = Field(default=0, ge=0, le=10000)
    # Range is checked with the other cross-field rules
    discount_percent: Optional[int] = None
    max_claims: Optional[int] = Field(default=None, ge=1, le=1000000)
    per_user_limit: Optional[int] = Field(default=None, ge=1, le=10000)
    requires_check_in: bool = False
    requires_purchase: bool = False
    terms: Optional[str] = Field(default=None, max_length=4000)
    metadata: Optional[Dict[str, Any]] = None
    starts_at: datetime
    ends_at: datetime

    @field_validator("starts_at", "ends_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    def validate_business_rules(self) -> None:
        """
        Cross-field rules. Raises ValidationError before anything is written.
        """
        if self.ends_at <= self.starts_at:
            raise ValidationError("ends_at must be later than starts_at", field="ends_at")

        if self.scope == PromotionScope.LOCATION and not self.location_ids:
            raise ValidationError(
                "Location-scoped promotions require at least one location",
                field="location_ids",
            )

        if self.discount_percent is not None:
            if self.promotion_type != PromotionType.DISCOUNT:
                raise ValidationError(
                    "discount_percent only applies to discount promotions",
                    field="discount_percent",
                )
            if not 0 <= self.discount_percent <= 100:
                raise ValidationError(
                    "discount_percent must be between 0 and 100",
                    field="discount_percent",
                )

        if self.promotion_type == PromotionType.CONTEST and self.prize is None:
            raise ValidationError("Contest promotions require a prize", field="prize")

    def unique_location_ids(self) -> List[UUID]:
        """location_ids without duplicates, first occurrence wins"""
        return list(dict.fromkeys(self.location_ids))


class PromotionCreate(PromotionBase):
    pass


class PromotionUpdate(PromotionBase):
    """Full replacement of a promotion. Status only changes when sent."""
    status: Optional[PromotionStatus] = None
    published_at: Optional[datetime] = None

    @field_validator("published_at")
    @classmethod
    def published_at_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class PromotionLocationSummary(BaseModel):
    id: UUID
    label: str

    class Config:
        from_attributes = True


class PromotionResponse(BaseModel):
    id: UUID
    registration_id: UUID
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    promotion_type: PromotionType
    scope: PromotionScope
    status: PromotionStatus
    image_url: Optional[str] = None
    prize: Optional[str] = None
    reward_points: int
    discount_percent: Optional[int] = None
    max_claims: Optional[int] = None
    per_user_limit: Optional[int] = None
    total_claims: int
    requires_check_in: bool
    requires_purchase: bool
    terms: Optional[str] = None
    metadata: Dict[str, Any] = metadata_field()
    starts_at: datetime
    ends_at: datetime
    published_at: Optional[datetime] = None
    created_by: Optional[UUID] = None
    updated_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime
    locations: List[PromotionLocationSummary] = Field(default_factory=list, exclude=True)

    @computed_field
    @property
    def location_ids(self) -> List[UUID]:
        return [location.id for location in self.locations]

    class Config:
        from_attributes = True
