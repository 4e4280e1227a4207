from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone

from returns.result import Success

from bakery_pos.core.domain.model.order import (
    Money,
    Order,
    OrderId,
    OrderLine,
    OrderNumber,
    OrderStatus,
    PaymentStatus,
)
from bakery_pos.core.domain.service.realtime_notifier import RealtimeNotifier
from bakery_pos.core.ports.inbound.get_order import OrderView
from bakery_pos.core.ports.outbound.events import (
    OrderCreated,
    OrderDeleted,
    OrderUpdated,
    envelope,
)


@dataclass(eq=False)
class FakeConnection:
    label: str
    ready: bool = True
    fail: bool = False
    sent: list = field(default_factory=list)

    def is_ready(self) -> bool:
        return self.ready

    def send(self, message: str) -> None:
        if self.fail:
            raise ConnectionResetError("peer went away")
        self.sent.append(json.loads(message))


def _view(status: OrderStatus = OrderStatus.PLACED) -> OrderView:
    order = Order(
        order_id=OrderId(1),
        order_number=OrderNumber("#3001"),
        customer_id=None,
        customer_name="Jane",
        status=status,
        subtotal=Money.of("17.98"),
        tax_amount=Money.of("1.53"),
        total=Money.of("19.51"),
        payment_method=None,
        payment_status=PaymentStatus.PENDING,
        notes=None,
        created_by=1,
        created_at=datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc),
        completed_at=None,
        lines=(
            OrderLine(
                product_id=7,
                product_name="Sourdough Loaf",
                unit_price=Money.of("8.99"),
                quantity=2,
                line_total=Money.of("17.98"),
                line_id=1,
            ),
        ),
    )
    return OrderView(order=order)


def test_skips_connections_that_are_not_ready():
    notifier = RealtimeNotifier()
    conns = [FakeConnection("a"), FakeConnection("b", ready=False), FakeConnection("c")]
    for c in conns:
        notifier.register_connection(c)

    delivered = notifier.broadcast(OrderDeleted(OrderId(5)))

    assert delivered == 2
    assert conns[0].sent == [{"type": "ORDER_DELETED", "data": {"id": 5}}]
    assert conns[1].sent == []
    assert conns[2].sent == conns[0].sent


def test_failing_connection_does_not_stop_others():
    notifier = RealtimeNotifier()
    broken = FakeConnection("broken", fail=True)
    healthy = FakeConnection("healthy")
    notifier.register_connection(broken)
    notifier.register_connection(healthy)

    delivered = notifier.broadcast(OrderCreated(_view()))

    assert delivered == 1
    assert healthy.sent[0]["type"] == "ORDER_CREATED"
    assert notifier.connection_count() == 2


def test_broadcast_with_no_connections():
    assert RealtimeNotifier().broadcast(OrderDeleted(OrderId(1))) == 0


def test_unregister_is_idempotent():
    notifier = RealtimeNotifier()
    conn = FakeConnection("a")
    notifier.register_connection(conn)

    notifier.unregister_connection(conn)
    notifier.unregister_connection(conn)
    notifier.unregister_connection(FakeConnection("never-registered"))

    assert notifier.connection_count() == 0
    assert notifier.broadcast(OrderDeleted(OrderId(1))) == 0
    assert conn.sent == []


def test_each_connection_sees_events_in_broadcast_order():
    notifier = RealtimeNotifier()
    conn = FakeConnection("a")
    notifier.register_connection(conn)

    notifier.broadcast(OrderCreated(_view()))
    notifier.broadcast(OrderUpdated(_view(OrderStatus.PROCESSING)))
    notifier.broadcast(OrderDeleted(OrderId(1)))

    assert [m["type"] for m in conn.sent] == ["ORDER_CREATED", "ORDER_UPDATED", "ORDER_DELETED"]


def test_publish_never_fails():
    notifier = RealtimeNotifier()
    notifier.register_connection(FakeConnection("broken", fail=True))

    assert notifier.publish(OrderDeleted(OrderId(1))) == Success(None)


def test_order_envelope_carries_full_snapshot():
    message = envelope(OrderUpdated(_view(OrderStatus.PROCESSING)))

    assert message["type"] == "ORDER_UPDATED"
    data = message["data"]
    assert data["id"] == 1
    assert data["orderNumber"] == "#3001"
    assert data["status"] == "processing"
    assert data["total"] == "19.51"
    assert data["completedAt"] is None
    assert data["customer"] is None
    assert data["items"][0]["productName"] == "Sourdough Loaf"
    assert data["items"][0]["totalPrice"] == "17.98"


def test_deleted_envelope_carries_only_the_id():
    assert envelope(OrderDeleted(OrderId(12))) == {"type": "ORDER_DELETED", "data": {"id": 12}}
