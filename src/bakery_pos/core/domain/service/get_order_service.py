from __future__ import annotations

from dataclasses import dataclass

from returns.result import Failure, Result, Success

from bakery_pos.core.domain.model.errors import OrderError, ValidationError
from bakery_pos.core.domain.model.order import Order, OrderId, OrderNumber
from bakery_pos.core.ports.inbound.get_order import (
    GetOrderQuery,
    GetOrderUseCase,
    OrderView,
)
from bakery_pos.core.ports.outbound.catalog import CustomerDirectory
from bakery_pos.core.ports.outbound.orders import OrderStore


@dataclass(frozen=True)
class GetOrderDeps:
    orders: OrderStore
    customers: CustomerDirectory


@dataclass(frozen=True)
class GetOrderService(GetOrderUseCase):
    deps: GetOrderDeps

    def get_order(self, query: GetOrderQuery) -> Result[OrderView, OrderError]:
        if query.order_id is not None:
            found = self.deps.orders.get(OrderId(query.order_id))
        elif query.order_number is not None and query.order_number.strip("# "):
            found = self.deps.orders.get_by_number(OrderNumber.parse(query.order_number))
        else:
            return Failure(
                ValidationError(message="order_id or order_number is required")
            )

        return found.bind(lambda o: resolve_view(o, self.deps.customers))


def resolve_view(order: Order, customers: CustomerDirectory) -> Result[OrderView, OrderError]:
    if order.customer_id is None:
        return Success(OrderView(order=order, customer=None))
    return customers.get(order.customer_id).map(
        lambda c: OrderView(order=order, customer=c)
    )
