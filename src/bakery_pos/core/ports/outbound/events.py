from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union

from returns.result import Result

from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.domain.model.order import OrderId
from bakery_pos.core.ports.outbound.snapshots import order_view_snapshot
from bakery_pos.core.ports.inbound.get_order import OrderView


@dataclass(frozen=True)
class OrderCreated:
    view: OrderView
    type: str = "ORDER_CREATED"

    def data(self) -> dict[str, Any]:
        return order_view_snapshot(self.view)


@dataclass(frozen=True)
class OrderUpdated:
    view: OrderView
    type: str = "ORDER_UPDATED"

    def data(self) -> dict[str, Any]:
        return order_view_snapshot(self.view)


@dataclass(frozen=True)
class OrderDeleted:
    order_id: OrderId
    type: str = "ORDER_DELETED"

    def data(self) -> dict[str, Any]:
        return {"id": self.order_id.value}


OrderEvent = Union[OrderCreated, OrderUpdated, OrderDeleted]


def envelope(event: OrderEvent) -> dict[str, Any]:
    return {"type": event.type, "data": event.data()}


class EventPublisher(Protocol):
    def publish(self, event: OrderEvent) -> Result[None, OrderError]: ...
