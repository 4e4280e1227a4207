from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable

from returns.result import Failure, Result, Success

from bakery_pos.core.domain.model.errors import OrderError, ValidationError
from bakery_pos.core.domain.model.order import (
    Order,
    OrderId,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    now_utc,
)
from bakery_pos.core.domain.service.get_order_service import resolve_view
from bakery_pos.core.domain.service.status_policy import StatusPolicy
from bakery_pos.core.ports.inbound.get_order import OrderView
from bakery_pos.core.ports.inbound.update_order import (
    OrderPatch,
    UpdateOrderCommand,
    UpdateOrderUseCase,
)
from bakery_pos.core.ports.outbound.catalog import CustomerDirectory
from bakery_pos.core.ports.outbound.events import EventPublisher, OrderUpdated
from bakery_pos.core.ports.outbound.orders import OrderStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateOrderDeps:
    orders: OrderStore
    customers: CustomerDirectory
    events: EventPublisher
    policy: StatusPolicy = StatusPolicy()
    clock: Callable[[], datetime] = now_utc


@dataclass(frozen=True)
class UpdateOrderService(UpdateOrderUseCase):
    deps: UpdateOrderDeps

    def update_order(
        self, command: UpdateOrderCommand
    ) -> Result[OrderView, OrderError]:
        changes = _validate_patch(command.patch)
        if isinstance(changes, Failure):
            return changes

        checked = self._check_customer(changes.unwrap())
        if isinstance(checked, Failure):
            return checked

        return (
            self.deps.orders.update(
                OrderId(command.order_id),
                lambda current: self._merge(current, checked.unwrap()),
            )
            .bind(lambda order: resolve_view(order, self.deps.customers))
            .bind(self._publish)
        )

    def _check_customer(self, changes: dict[str, Any]) -> Result[dict[str, Any], OrderError]:
        customer_id = changes.get("customer_id")
        if customer_id is None:
            return Success(changes)
        return self.deps.customers.get(customer_id).bind(
            lambda c: Success(changes)
            if c is not None
            else Failure(ValidationError(f"customer_id {customer_id} does not exist"))
        )

    def _merge(self, current: Order, changes: dict[str, Any]) -> Result[Order, OrderError]:
        """Runs inside the store's critical section, so ``current`` is the latest state."""
        status = changes.get("status", current.status)
        checked = self.deps.policy.check(current.status, status)
        if isinstance(checked, Failure):
            return checked

        completed_at = current.completed_at
        if status == OrderStatus.COMPLETED and current.status != OrderStatus.COMPLETED:
            completed_at = self.deps.clock()

        return Success(replace(current, **changes, completed_at=completed_at))

    def _publish(self, view: OrderView) -> Result[OrderView, OrderError]:
        logger.info(
            "order updated: %s (%s)",
            view.order.order_number.value,
            view.order.status.value,
        )
        return self.deps.events.publish(OrderUpdated(view)).map(lambda _: view)


def _validate_patch(patch: OrderPatch) -> Result[dict[str, Any], OrderError]:
    raw = patch.provided()
    changes: dict[str, Any] = {}

    if "status" in raw:
        try:
            changes["status"] = OrderStatus(raw["status"])
        except ValueError:
            return Failure(ValidationError(f"unknown status: {raw['status']!r}"))

    if "payment_status" in raw:
        try:
            changes["payment_status"] = PaymentStatus(raw["payment_status"])
        except ValueError:
            return Failure(
                ValidationError(f"unknown payment_status: {raw['payment_status']!r}")
            )

    if "payment_method" in raw:
        method = raw["payment_method"]
        try:
            changes["payment_method"] = PaymentMethod(method) if method else None
        except ValueError:
            return Failure(ValidationError(f"unknown payment_method: {method!r}"))

    if "customer_id" in raw:
        cid = raw["customer_id"]
        if cid is not None and cid <= 0:
            return Failure(ValidationError("customer_id must be > 0 when provided"))
        changes["customer_id"] = cid

    for key in ("notes", "customer_name"):
        if key in raw:
            value = raw[key].strip() if raw[key] is not None else None
            changes[key] = value or None

    return Success(changes)
