"""
Catalog snapshot handed to the engine on every call.
"""

from typing import Optional

from models.base import FrozenSchema
from models.product import ProductDefinition
from models.customer import Customer, PackagingRuleSet


class CatalogSnapshot(FrozenSchema):
    """
    Read-only view of products, customers and their packaging rules.

    Callers build a fresh snapshot whenever their store reloads; the
    engine keeps nothing between calls.
    """

    products: tuple[ProductDefinition, ...] = ()
    customers: tuple[Customer, ...] = ()
    rule_set: PackagingRuleSet = PackagingRuleSet()

    def get_product(self, product_id: str) -> Optional[ProductDefinition]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        for customer in self.customers:
            if customer.id == customer_id:
                return customer
        return None
