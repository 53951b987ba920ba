"""
Customer rule selection.

Finds the packaging rule that applies to one (customer, product) pair.
Matching is exact and case-sensitive; resolving a customer name to an id
happens before this point (see PackingService.resolve_customer_id).
"""

from typing import Optional
import structlog

from models.customer import CustomerPackagingRule, PackagingRuleSet

logger = structlog.get_logger(__name__)


def find_rule(
    customer_id: Optional[str],
    product_id: str,
    rule_set: Optional[PackagingRuleSet]
) -> Optional[CustomerPackagingRule]:
    """
    Select the customer rule for a product.

    A product rule is layered over the customer-wide rule when both
    exist. With only one of them, that one is returned.

    Args:
        customer_id: Concrete customer id (None for walk-in lines)
        product_id: Product id
        rule_set: Rule snapshot

    Returns:
        CustomerPackagingRule or None when the customer has no rules
    """
    if not customer_id or rule_set is None:
        return None

    customer_wide: Optional[CustomerPackagingRule] = None
    product_rule: Optional[CustomerPackagingRule] = None

    for rule in rule_set.rules:
        if rule.customer_id != customer_id:
            continue
        if rule.product_id is None:
            customer_wide = rule
        elif rule.product_id == product_id:
            product_rule = rule

    if product_rule and customer_wide:
        rule = product_rule.merged_over(customer_wide)
    else:
        rule = product_rule or customer_wide

    logger.debug(
        "customer_rule_selected",
        customer_id=customer_id,
        product_id=product_id,
        found=rule is not None,
        layered=bool(product_rule and customer_wide),
    )
    return rule
