from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence

from returns.result import Result, Success

from bakery_pos.core.domain.model.catalog import Customer, Product
from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.ports.outbound.catalog import CustomerDirectory, ProductCatalog


@dataclass
class InMemoryProductCatalog(ProductCatalog):
    products_by_id: Dict[int, Product] = field(default_factory=dict)

    def add(self, product: Product) -> None:
        self.products_by_id[product.product_id] = product

    def list_products(self) -> Result[Sequence[Product], OrderError]:
        return Success(tuple(self.products_by_id.values()))


@dataclass
class InMemoryCustomerDirectory(CustomerDirectory):
    customers_by_id: Dict[int, Customer] = field(default_factory=dict)

    def add(self, customer: Customer) -> None:
        self.customers_by_id[customer.customer_id] = customer

    def get(self, customer_id: int) -> Result[Customer | None, OrderError]:
        return Success(self.customers_by_id.get(customer_id))
