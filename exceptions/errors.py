"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and a details dict
so routes can return a uniform error body.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PLANT_DATA_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


# ===================
# INGESTION ERRORS
# ===================

class RecordValidationError(ValidationError):
    """Raw records failed validation at the ingestion boundary."""

    def __init__(self, kind: str, errors: list[dict]):
        super().__init__(
            code=f"{kind.upper()}_RECORDS_INVALID",
            message=f"{kind.capitalize()} data failed validation with {len(errors)} errors",
            details={"kind": kind, "errors": errors}
        )


# ===================
# PLANT DATA ERRORS
# ===================

class PlantDataNotFoundError(NotFoundError):
    """No plant data supplied and none persisted."""

    def __init__(self, location: str):
        super().__init__(
            resource="Plant data",
            identifier=location,
            code="PLANT_DATA_NOT_FOUND"
        )


class PlantStoreError(AppError):
    """Persisted plant data could not be read or written (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="PLANT_STORE_ERROR",
            message=f"Plant store {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )
