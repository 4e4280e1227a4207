from __future__ import annotations

from typing import Protocol, Sequence

from returns.result import Result

from bakery_pos.core.domain.model.catalog import Customer, Product
from bakery_pos.core.domain.model.errors import OrderError


class ProductCatalog(Protocol):
    def list_products(self) -> Result[Sequence[Product], OrderError]: ...


class CustomerDirectory(Protocol):
    def get(self, customer_id: int) -> Result[Customer | None, OrderError]: ...
