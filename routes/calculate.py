"""
Calculate API routes.

Stateless wrappers over the packing engine. Nothing is stored; every
request carries or names all of its inputs.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from config import settings, get_seed_snapshot, SYSTEM_DEFAULTS
from models.calculate import (
    LineCalculationRequest,
    OrderPreviewRequest,
    OrderCalculation,
)
from models.packing import LineCalculationResult
from services.packaging_config_service import resolve_config
from services.packing_calculator_service import calculate_line
from services.packing_service import get_packing_service
from exceptions import AppError, ValidationError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def _check_quantity(quantity, product_id: str) -> None:
    """Reject quantities above the configured per-line limit."""
    if quantity > settings.max_line_quantity:
        raise ValidationError(
            message=f"Quantity exceeds the limit of {settings.max_line_quantity}",
            code="QUANTITY_TOO_LARGE",
            details={"product_id": product_id, "quantity": str(quantity)}
        )


# ===================
# ROUTES
# ===================

@router.post("/line", response_model=LineCalculationResult)
async def calculate_single_line(data: LineCalculationRequest):
    """
    Calculate packing for one line from an inline product and rule.

    Raises:
        422: Configuration error or unsupported order-by unit
    """
    try:
        _check_quantity(data.quantity, data.product.id)
        config = resolve_config(data.product, data.rule, data.overrides)
        return calculate_line(config, data.quantity, data.order_by_unit)

    except Exception as e:
        return handle_error(e)


@router.post("/preview", response_model=OrderCalculation)
async def preview_order(data: OrderPreviewRequest):
    """
    Preview packing for a customer's order against the built-in catalog.

    The customer may be given by id or by name.

    Raises:
        404: Customer or product not found
        422: Configuration error or unsupported order-by unit
    """
    try:
        if len(data.items) > settings.max_lines_per_order:
            raise ValidationError(
                message=f"An order may have at most {settings.max_lines_per_order} lines",
                code="TOO_MANY_LINES",
                details={"lines": len(data.items)}
            )
        for item in data.items:
            _check_quantity(item.quantity, item.product_id)

        service = get_packing_service()
        return service.calculate_order(data.customer, data.items, get_seed_snapshot())

    except Exception as e:
        return handle_error(e)


@router.get("/defaults")
async def get_defaults():
    """System packaging defaults used when nothing else is configured."""
    return SYSTEM_DEFAULTS
