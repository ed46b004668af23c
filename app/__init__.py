"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    MealMinderError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    UnsupportedMediaTypeError,
)

__all__ = [
    "settings",
    "MealMinderError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "UnsupportedMediaTypeError",
]
