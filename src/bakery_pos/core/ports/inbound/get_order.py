from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from returns.result import Result

from bakery_pos.core.domain.model.catalog import Customer
from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.domain.model.order import Order


@dataclass(frozen=True)
class GetOrderQuery:
    order_id: int | None = None
    order_number: str | None = None


@dataclass(frozen=True)
class OrderView:
    order: Order
    customer: Customer | None = None


class GetOrderUseCase(Protocol):
    def get_order(self, query: GetOrderQuery) -> Result[OrderView, OrderError]: ...
