"""
Custom exceptions module.

All errors carry a code, message, HTTP status and details dict.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,

    # Packing
    ConfigurationError,
    UnitMismatchError,

    # Catalog
    ProductNotFoundError,
    CustomerNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",

    # Packing
    "ConfigurationError",
    "UnitMismatchError",

    # Catalog
    "ProductNotFoundError",
    "CustomerNotFoundError",
]
