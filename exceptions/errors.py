"""
Custom exception classes for the application.

Every engine failure is an AppError so the API layer can render it
with a stable error code.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_FOUND")
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
        self.timestamp = datetime.now(timezone.utc).isoformat()
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
# PACKING ERRORS
# ===================

class ConfigurationError(ValidationError):
    """
    A required packaging parameter could not be resolved.

    Raised when a tray/tub weight, units-per-box or count-per-tub is
    missing from every source (line override, customer rule, product,
    system default) or resolves to a non-positive value.
    """

    def __init__(
        self,
        field: str,
        product_id: str,
        reason: str = "missing",
        value: Any = None
    ):
        details = {"field": field, "product_id": product_id, "reason": reason}
        if value is not None:
            details["value"] = str(value)
        super().__init__(
            code="PACKING_CONFIGURATION_ERROR",
            message=f"Cannot resolve {field} for product {product_id}: {reason}",
            details=details
        )
        self.field = field
        self.product_id = product_id


class UnitMismatchError(ValidationError):
    """Order-by unit not supported by the product's packaging."""

    def __init__(
        self,
        order_by_unit: str,
        product_id: str,
        category: str,
        supported: Optional[list[str]] = None
    ):
        super().__init__(
            code="PACKING_UNIT_MISMATCH",
            message=f"Product {product_id} ({category}) cannot be ordered by {order_by_unit}",
            details={
                "order_by_unit": order_by_unit,
                "product_id": product_id,
                "category": category,
                "supported": supported or [],
            }
        )
        self.order_by_unit = order_by_unit
        self.product_id = product_id


# ===================
# CATALOG ERRORS
# ===================

class ProductNotFoundError(NotFoundError):
    """Product not found in the catalog snapshot."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Product",
            identifier=product_id,
            code="PRODUCT_NOT_FOUND"
        )


class CustomerNotFoundError(NotFoundError):
    """Customer could not be resolved by id or name."""

    def __init__(self, customer_ref: str):
        super().__init__(
            resource="Customer",
            identifier=customer_ref,
            code="CUSTOMER_NOT_FOUND"
        )
