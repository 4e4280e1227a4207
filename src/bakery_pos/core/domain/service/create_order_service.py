from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Tuple

from returns.pipeline import flow
from returns.pointfree import bind
from returns.result import Failure, Result, Success

from bakery_pos.core.domain.model.errors import OrderError, ValidationError
from bakery_pos.core.domain.model.order import (
    NewOrder,
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    now_utc,
)
from bakery_pos.core.domain.service.get_order_service import resolve_view
from bakery_pos.core.domain.service.pricing import Totals, derive_totals, price_lines
from bakery_pos.core.ports.inbound.create_order import CreateOrderUseCase, OrderDraft
from bakery_pos.core.ports.inbound.get_order import OrderView
from bakery_pos.core.ports.outbound.catalog import CustomerDirectory
from bakery_pos.core.ports.outbound.events import EventPublisher, OrderCreated
from bakery_pos.core.ports.outbound.orders import OrderStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateOrderDeps:
    orders: OrderStore
    customers: CustomerDirectory
    events: EventPublisher
    tax_rate: Decimal = Decimal("8.5")
    currency: str = "USD"
    clock: Callable[[], datetime] = now_utc


@dataclass(frozen=True)
class CreateOrderContext:
    draft: OrderDraft
    lines: Tuple[OrderLine, ...]
    totals: Totals


@dataclass(frozen=True)
class CreateOrderService(CreateOrderUseCase):
    deps: CreateOrderDeps

    def create_order(self, draft: OrderDraft) -> Result[OrderView, OrderError]:
        return flow(
            draft,
            _validate_draft,
            bind(self._check_customer),
            bind(self._price),
            bind(self._insert),
            bind(lambda order: resolve_view(order, self.deps.customers)),
            bind(self._publish),
        )

    def _check_customer(self, draft: OrderDraft) -> Result[OrderDraft, OrderError]:
        if draft.customer_id is None:
            return Success(draft)

        def _exists(customer) -> Result[OrderDraft, OrderError]:
            if customer is None:
                return Failure(
                    ValidationError(f"customer_id {draft.customer_id} does not exist")
                )
            return Success(draft)

        return self.deps.customers.get(draft.customer_id).bind(_exists)

    def _price(self, draft: OrderDraft) -> Result[CreateOrderContext, OrderError]:
        currency = self.deps.currency
        return price_lines(draft.lines, currency).bind(
            lambda lines: derive_totals(draft, lines, self.deps.tax_rate, currency).map(
                lambda totals: CreateOrderContext(draft=draft, lines=lines, totals=totals)
            )
        )

    def _insert(self, ctx: CreateOrderContext) -> Result[Order, OrderError]:
        draft = ctx.draft
        new_order = NewOrder(
            customer_id=draft.customer_id,
            customer_name=_clean(draft.customer_name),
            status=OrderStatus(draft.status) if draft.status else OrderStatus.PLACED,
            subtotal=ctx.totals.subtotal,
            tax_amount=ctx.totals.tax_amount,
            total=ctx.totals.total,
            payment_method=PaymentMethod(draft.payment_method)
            if draft.payment_method
            else None,
            payment_status=PaymentStatus(draft.payment_status)
            if draft.payment_status
            else PaymentStatus.PENDING,
            notes=_clean(draft.notes),
            created_by=draft.created_by,
            created_at=self.deps.clock(),
            lines=ctx.lines,
        )
        return self.deps.orders.insert(new_order)

    def _publish(self, view: OrderView) -> Result[OrderView, OrderError]:
        logger.info(
            "order created: %s (%s)",
            view.order.order_number.value,
            view.order.status.value,
        )
        return self.deps.events.publish(OrderCreated(view)).map(lambda _: view)


# ---- pure helpers ----------------------------------------------------------


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _validate_draft(draft: OrderDraft) -> Result[OrderDraft, OrderError]:
    if draft.created_by <= 0:
        return Failure(ValidationError("created_by must be > 0"))
    if draft.customer_id is not None and draft.customer_id <= 0:
        return Failure(ValidationError("customer_id must be > 0 when provided"))
    if not draft.lines:
        return Failure(ValidationError("at least one line item is required"))

    for name, raw, enum in (
        ("status", draft.status, OrderStatus),
        ("payment_method", draft.payment_method, PaymentMethod),
        ("payment_status", draft.payment_status, PaymentStatus),
    ):
        if raw is not None and raw not in {m.value for m in enum}:
            return Failure(ValidationError(f"{name} must be one of: {_choices(enum)}"))

    for name, amount in (
        ("subtotal", draft.subtotal),
        ("tax_amount", draft.tax_amount),
        ("total", draft.total),
    ):
        if amount is not None and Decimal(str(amount)) < 0:
            return Failure(ValidationError(f"{name} must be >= 0"))

    for i, ln in enumerate(draft.lines):
        if ln.product_id <= 0:
            return Failure(ValidationError(f"lines[{i}].product_id must be > 0"))
        if not ln.product_name.strip():
            return Failure(ValidationError(f"lines[{i}].product_name is required"))
        if ln.quantity <= 0:
            return Failure(ValidationError(f"lines[{i}].quantity must be > 0"))
        if Decimal(str(ln.unit_price)) < 0:
            return Failure(ValidationError(f"lines[{i}].unit_price must be >= 0"))
        if ln.line_total is not None and Decimal(str(ln.line_total)) < 0:
            return Failure(ValidationError(f"lines[{i}].line_total must be >= 0"))

    return Success(draft)


def _choices(enum) -> str:
    return ", ".join(m.value for m in enum)
