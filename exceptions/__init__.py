"""
Custom exceptions module.

All application errors derive from AppError.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,

    # Ingestion
    RecordValidationError,

    # Plant data
    PlantDataNotFoundError,
    PlantStoreError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",

    # Ingestion
    "RecordValidationError",

    # Plant data
    "PlantDataNotFoundError",
    "PlantStoreError",
]
