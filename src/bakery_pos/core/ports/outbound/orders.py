from __future__ import annotations

from typing import Callable, Protocol, Sequence

from returns.result import Result

from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.domain.model.order import (
    NewOrder,
    Order,
    OrderId,
    OrderLine,
    OrderNumber,
)

OrderMutation = Callable[[Order], Result[Order, OrderError]]


class OrderStore(Protocol):
    """
    Authoritative storage for orders and their lines.

    A database-backed implementation wraps ``insert`` (header plus lines) in a
    single transaction and ``update`` in ``SELECT ... FOR UPDATE``.
    """

    def insert(self, new_order: NewOrder) -> Result[Order, OrderError]:
        """Assigns the next id and order number and stores header and lines together."""
        ...

    def update(
        self, order_id: OrderId, mutate: OrderMutation
    ) -> Result[Order, OrderError]:
        """Applies ``mutate`` to the current order and stores the result atomically.

        A Failure from ``mutate`` leaves the stored order untouched.
        """
        ...

    def delete(self, order_id: OrderId) -> Result[OrderId, OrderError]: ...

    def get(self, order_id: OrderId) -> Result[Order, OrderError]: ...

    def get_by_number(self, order_number: OrderNumber) -> Result[Order, OrderError]: ...

    def lines_for(self, order_id: OrderId) -> Result[Sequence[OrderLine], OrderError]: ...

    def list(self, status: str | None = None) -> Result[Sequence[Order], OrderError]: ...
