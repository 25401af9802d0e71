"""
Centralized enumerations for the business review service.

Every value is the exact string stored in the database column.
"""
from enum import Enum


# ============================================================================
# REVIEW WORKFLOW ENUMS
# ============================================================================

class VerificationStatus(str, Enum):
    """Lifecycle status of a business registration request"""
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"


class ReviewAction(str, Enum):
    """Actions a reviewer can take on a registration"""
    APPROVE = "approve"
    REJECT = "reject"
    REQUEST_MORE_INFO = "request_more_info"
    SUSPEND = "suspend"
    RESUME = "resume"
    COMMENT = "comment"


# ============================================================================
# PROMOTION ENUMS
# ============================================================================

class PromotionType(str, Enum):
    DISCOUNT = "discount"
    CONTEST = "contest"
    EVENT = "event"
    CHALLENGE = "challenge"


class PromotionScope(str, Enum):
    """Whether a promotion applies business-wide or to specific locations"""
    BUSINESS = "business"
    LOCATION = "location"


class PromotionStatus(str, Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


# ============================================================================
# LOCATION ADMIN ENUMS
# ============================================================================

class LocationAdminRole(str, Enum):
    OWNER = "owner"      # Full control
    MANAGER = "manager"  # Manages the location and its promotions
    STAFF = "staff"      # View only


def enum_values(enum_cls):
    """Column value table for ``sqlalchemy.Enum(values_callable=...)``."""
    return [member.value for member in enum_cls]
