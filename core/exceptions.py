"""
Error taxonomy shared by services and the HTTP layer.

Services raise these; ``main.py`` turns them into ``error_response`` payloads.
Validation and business-rule errors are raised before any write begins.
"""
from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base class for every error a service operation can surface."""

    status_code: int = 500
    code: str = "SERVICE_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(ServiceError):
    """Malformed or out-of-range input."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, {"field": field} if field else None)
        self.field = field


class NotFoundError(ServiceError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(ServiceError):
    """Business-rule violation against the current state of the data."""

    status_code = 400
    code = "CONFLICT"


class PersistenceError(ServiceError):
    """Transaction or connection failure. The message is safe to show callers."""

    status_code = 500
    code = "PERSISTENCE_ERROR"

    def __init__(self, message: str = "A database error occurred"):
        super().__init__(message)
