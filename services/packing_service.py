"""
Packing Service - order-level orchestration over the engine.

Resolves the customer, then runs find_rule -> resolve_config ->
calculate_line for each line and aggregates the results. The catalog
snapshot is passed in on every call; the service holds no data.
"""

from typing import Iterable, Optional
import structlog

from models.catalog import CatalogSnapshot
from models.customer import Customer
from models.calculate import OrderCalculation, OrderLineInput
from models.packing import LineCalculationResult
from services.rule_service import find_rule
from services.packaging_config_service import resolve_config
from services.packing_calculator_service import calculate_line
from services.order_totals_service import aggregate
from exceptions import AppError, CustomerNotFoundError, ProductNotFoundError
from utils.text_utils import normalize_customer_name

logger = structlog.get_logger(__name__)


class PackingService:
    """
    Packing calculation for whole orders.

    Stateless: safe to share between requests and threads.
    """

    # ===================
    # CUSTOMER LOOKUP
    # ===================

    def resolve_customer(
        self,
        customer_ref: str,
        snapshot: CatalogSnapshot
    ) -> Customer:
        """
        Find a customer by id, falling back to a name match.

        Id match is exact. Name match ignores case, accents and
        surrounding whitespace.

        Args:
            customer_ref: Customer id or display name
            snapshot: Catalog snapshot

        Returns:
            Customer

        Raises:
            CustomerNotFoundError: Neither id nor name matches
        """
        customer = snapshot.get_customer(customer_ref)
        if customer:
            return customer

        wanted = normalize_customer_name(customer_ref)
        if wanted:
            for candidate in snapshot.customers:
                if normalize_customer_name(candidate.name) == wanted:
                    logger.info(
                        "customer_matched_by_name",
                        customer_ref=customer_ref,
                        customer_id=candidate.id
                    )
                    return candidate

        raise CustomerNotFoundError(customer_ref)

    def resolve_customer_id(
        self,
        customer_ref: str,
        snapshot: CatalogSnapshot
    ) -> str:
        """Concrete customer id for an id or a name."""
        return self.resolve_customer(customer_ref, snapshot).id

    # ===================
    # CALCULATION
    # ===================

    def calculate_item(
        self,
        customer_id: Optional[str],
        item: OrderLineInput,
        snapshot: CatalogSnapshot
    ) -> LineCalculationResult:
        """
        Calculate one order line.

        Raises:
            ProductNotFoundError: Product not in the snapshot
            ConfigurationError: Packaging parameters could not be resolved
            UnitMismatchError: Order-by unit not supported for the product
        """
        product = snapshot.get_product(item.product_id)
        if product is None:
            raise ProductNotFoundError(item.product_id)

        rule = find_rule(customer_id, product.id, snapshot.rule_set)
        config = resolve_config(product, rule, item.overrides)
        return calculate_line(config, item.quantity)

    def calculate_order(
        self,
        customer_ref: Optional[str],
        items: Iterable[OrderLineInput],
        snapshot: CatalogSnapshot
    ) -> OrderCalculation:
        """
        Calculate every line of an order and the order totals.

        Args:
            customer_ref: Customer id or name, None for no customer rules
            items: Order lines
            snapshot: Catalog snapshot

        Returns:
            OrderCalculation with lines in input order

        Raises:
            CustomerNotFoundError: customer_ref does not match a customer
            AppError: First line that fails; the order is not partially returned
        """
        customer = self.resolve_customer(customer_ref, snapshot) if customer_ref else None
        customer_id = customer.id if customer else None

        lines = []
        for item in items:
            try:
                lines.append(self.calculate_item(customer_id, item, snapshot))
            except AppError as e:
                logger.warning(
                    "order_line_failed",
                    customer_id=customer_id,
                    product_id=item.product_id,
                    code=e.code,
                    error=e.message
                )
                raise

        totals = aggregate(lines)

        logger.info(
            "order_calculated",
            customer_id=customer_id,
            items=totals.item_count,
            total_boxes=totals.total_boxes,
            total_weight_kg=str(totals.total_weight_kg)
        )

        return OrderCalculation(
            customer_id=customer_id,
            customer_name=customer.name if customer else None,
            lines=tuple(lines),
            totals=totals,
        )


# Singleton instance for convenience
_packing_service: Optional[PackingService] = None

def get_packing_service() -> PackingService:
    """Get or create PackingService instance."""
    global _packing_service
    if _packing_service is None:
        _packing_service = PackingService()
    return _packing_service
