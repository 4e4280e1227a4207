from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, Sequence

from returns.result import Result

from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.ports.inbound.get_order import OrderView


@dataclass(frozen=True)
class OrderLineDraft:
    product_id: int
    product_name: str
    unit_price: Decimal
    quantity: int
    line_total: Decimal | None = None


@dataclass(frozen=True)
class OrderDraft:
    created_by: int
    lines: Sequence[OrderLineDraft]
    customer_id: int | None = None
    customer_name: str | None = None
    status: str | None = None
    subtotal: Decimal | None = None
    tax_amount: Decimal | None = None
    total: Decimal | None = None
    payment_method: str | None = None
    payment_status: str | None = None
    notes: str | None = None


class CreateOrderUseCase(Protocol):
    def create_order(self, draft: OrderDraft) -> Result[OrderView, OrderError]: ...
