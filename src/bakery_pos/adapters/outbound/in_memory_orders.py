from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Dict, Sequence, Tuple

from returns.result import Failure, Result, Success

from bakery_pos.core.domain.model.errors import OrderError, OrderNotFound
from bakery_pos.core.domain.model.order import (
    NewOrder,
    Order,
    OrderId,
    OrderLine,
    OrderNumber,
)
from bakery_pos.core.ports.outbound.orders import OrderMutation, OrderStore


@dataclass
class InMemoryOrderStore(OrderStore):
    """
    Orders and order lines kept in two maps, the way the relational tables
    split them. Every read and write takes the same lock, so an order is
    never observable without its lines or vice versa.
    """

    order_number_start: int = 3000
    _orders: Dict[int, Order] = field(default_factory=dict)
    _lines: Dict[int, Tuple[OrderLine, ...]] = field(default_factory=dict)
    _next_order_id: int = 1
    _next_line_id: int = 1
    _lock: threading.RLock = field(default_factory=threading.RLock)

    def insert(self, new_order: NewOrder) -> Result[Order, OrderError]:
        with self._lock:
            order_id = OrderId(self._next_order_id)
            order_number = OrderNumber.for_id(order_id, self.order_number_start)
            self._next_order_id += 1

            lines = []
            for ln in new_order.lines:
                lines.append(replace(ln, line_id=self._next_line_id))
                self._next_line_id += 1

            order = Order(
                order_id=order_id,
                order_number=order_number,
                customer_id=new_order.customer_id,
                customer_name=new_order.customer_name,
                status=new_order.status,
                subtotal=new_order.subtotal,
                tax_amount=new_order.tax_amount,
                total=new_order.total,
                payment_method=new_order.payment_method,
                payment_status=new_order.payment_status,
                notes=new_order.notes,
                created_by=new_order.created_by,
                created_at=new_order.created_at,
                completed_at=None,
                lines=(),
            )
            self._orders[order_id.value] = order
            self._lines[order_id.value] = tuple(lines)
            return Success(self._assemble(order))

    def update(
        self, order_id: OrderId, mutate: OrderMutation
    ) -> Result[Order, OrderError]:
        with self._lock:
            got = self.get(order_id)
            if isinstance(got, Failure):
                return got

            mutated = mutate(got.unwrap())
            if isinstance(mutated, Failure):
                return mutated

            # lines are immutable once created; only the header is written back
            self._orders[order_id.value] = replace(mutated.unwrap(), lines=())
            return Success(self._assemble(self._orders[order_id.value]))

    def delete(self, order_id: OrderId) -> Result[OrderId, OrderError]:
        with self._lock:
            if order_id.value not in self._orders:
                return Failure(_not_found(order_id))
            del self._orders[order_id.value]
            self._lines.pop(order_id.value, None)
            return Success(order_id)

    def get(self, order_id: OrderId) -> Result[Order, OrderError]:
        with self._lock:
            order = self._orders.get(order_id.value)
            if order is None:
                return Failure(_not_found(order_id))
            return Success(self._assemble(order))

    def get_by_number(self, order_number: OrderNumber) -> Result[Order, OrderError]:
        with self._lock:
            for order in self._orders.values():
                if order.order_number == order_number:
                    return Success(self._assemble(order))
        return Failure(
            OrderNotFound(message="order not found", order_ref=order_number.value)
        )

    def lines_for(self, order_id: OrderId) -> Result[Sequence[OrderLine], OrderError]:
        with self._lock:
            lines = self._lines.get(order_id.value)
            if lines is None:
                return Failure(_not_found(order_id))
            return Success(lines)

    def list(self, status: str | None = None) -> Result[Sequence[Order], OrderError]:
        with self._lock:
            orders = [
                self._assemble(o)
                for o in self._orders.values()  # insertion order
                if status is None or o.status.value == status
            ]
        return Success(tuple(orders))

    def _assemble(self, header: Order) -> Order:
        return replace(header, lines=self._lines.get(header.order_id.value, ()))


def _not_found(order_id: OrderId) -> OrderNotFound:
    return OrderNotFound(message="order not found", order_ref=str(order_id.value))
