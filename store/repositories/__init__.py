"""
Repository package for database operations.
Following Repository Pattern for clean separation of data access logic.
"""
from .base import BaseRepository
from .registration import RegistrationRepository, ReviewEventRepository
from .location import LocationRepository, LocationAdminRepository
from .promotion import PromotionRepository
from .company import CompanyRepository, BusinessUnitRepository
from .business import BusinessRepository

__all__ = [
    "BaseRepository",
    "RegistrationRepository",
    "ReviewEventRepository",
    "LocationRepository",
    "LocationAdminRepository",
    "PromotionRepository",
    "CompanyRepository",
    "BusinessUnitRepository",
    "BusinessRepository",
]
