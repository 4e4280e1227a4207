from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from returns.result import Failure, Result, Success

from bakery_pos.core.domain.model.errors import OrderError, ValidationError
from bakery_pos.core.domain.model.order import Order, OrderStatus
from bakery_pos.core.domain.service.get_order_service import resolve_view
from bakery_pos.core.ports.inbound.get_order import OrderView
from bakery_pos.core.ports.inbound.list_orders import (
    ListOrdersQuery,
    ListOrdersUseCase,
)
from bakery_pos.core.ports.outbound.catalog import CustomerDirectory
from bakery_pos.core.ports.outbound.orders import OrderStore


@dataclass(frozen=True)
class ListOrdersDeps:
    orders: OrderStore
    customers: CustomerDirectory


@dataclass(frozen=True)
class ListOrdersService(ListOrdersUseCase):
    deps: ListOrdersDeps

    def list_orders(
        self, query: ListOrdersQuery
    ) -> Result[Sequence[OrderView], OrderError]:
        if query.status is not None and query.status not in {
            s.value for s in OrderStatus
        }:
            return Failure(
                ValidationError(
                    message="status must be one of: "
                    + ", ".join(s.value for s in OrderStatus)
                )
            )
        if query.limit is not None and query.limit <= 0:
            return Failure(ValidationError(message="limit must be > 0"))
        if (
            query.created_from is not None
            and query.created_to is not None
            and query.created_from > query.created_to
        ):
            return Failure(
                ValidationError(message="created_from must not be after created_to")
            )

        return (
            self.deps.orders.list(status=query.status)
            .map(lambda orders: _window(orders, query))
            .bind(self._resolve_all)
        )

    def _resolve_all(
        self, orders: Sequence[Order]
    ) -> Result[Sequence[OrderView], OrderError]:
        views = []
        for order in orders:
            resolved = resolve_view(order, self.deps.customers)
            if isinstance(resolved, Failure):
                return resolved
            views.append(resolved.unwrap())
        return Success(tuple(views))


def _window(orders: Sequence[Order], query: ListOrdersQuery) -> Sequence[Order]:
    selected = [
        o
        for o in orders
        if (query.created_from is None or o.created_at >= query.created_from)
        and (query.created_to is None or o.created_at <= query.created_to)
    ]
    if query.newest_first:
        selected = sorted(
            selected, key=lambda o: (o.created_at, o.order_id.value), reverse=True
        )
    if query.limit is not None:
        selected = selected[: query.limit]
    return selected
