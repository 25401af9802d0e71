"""
Enums package for system-wide enumerations.
"""
from .enums import (
    VerificationStatus,
    ReviewAction,
    PromotionType,
    PromotionScope,
    PromotionStatus,
    LocationAdminRole,
    enum_values,
)

__all__ = [
    "VerificationStatus",
    "ReviewAction",
    "PromotionType",
    "PromotionScope",
    "PromotionStatus",
    "LocationAdminRole",
    "enum_values",
]
