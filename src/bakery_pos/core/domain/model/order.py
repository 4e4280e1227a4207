from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable, Tuple

CENT = Decimal("0.01")


class OrderStatus(str, Enum):
    PLACED = "placed"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    DIGITAL = "digital"


@dataclass(frozen=True)
class OrderId:
    value: int


@dataclass(frozen=True)
class OrderNumber:
    value: str

    @staticmethod
    def for_id(order_id: OrderId, start: int) -> "OrderNumber":
        return OrderNumber(f"#{start + order_id.value}")

    @staticmethod
    def parse(raw: str) -> "OrderNumber":
        s = raw.strip()
        return OrderNumber(s if s.startswith("#") else f"#{s}")


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str = "USD"

    @staticmethod
    def of(amount: Decimal | int | str, currency: str = "USD") -> "Money":
        dec = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
        return Money(dec, currency)

    def __add__(self, other: "Money") -> "Money":
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, n: int) -> "Money":
        return Money(
            (self.amount * Decimal(n)).quantize(CENT, rounding=ROUND_HALF_UP),
            self.currency,
        )

    def percent(self, rate: Decimal) -> "Money":
        return Money(
            (self.amount * rate / Decimal(100)).quantize(CENT, rounding=ROUND_HALF_UP),
            self.currency,
        )

    def close_to(self, other: "Money", tolerance: Decimal = CENT) -> bool:
        self._assert_same_currency(other)
        return abs(self.amount - other.amount) <= tolerance

    def _assert_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise ValueError(f"currency_mismatch: {self.currency} vs {other.currency}")


@dataclass(frozen=True)
class OrderLine:
    """One product quantity, with name and price captured when the order was taken."""

    product_id: int
    product_name: str
    unit_price: Money
    quantity: int
    line_total: Money
    line_id: int | None = None


@dataclass(frozen=True)
class NewOrder:
    """Order content before the store has assigned an id and number."""

    customer_id: int | None
    customer_name: str | None
    status: OrderStatus
    subtotal: Money
    tax_amount: Money
    total: Money
    payment_method: PaymentMethod | None
    payment_status: PaymentStatus
    notes: str | None
    created_by: int
    created_at: datetime
    lines: Tuple[OrderLine, ...]


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    order_number: OrderNumber
    customer_id: int | None
    customer_name: str | None
    status: OrderStatus
    subtotal: Money
    tax_amount: Money
    total: Money
    payment_method: PaymentMethod | None
    payment_status: PaymentStatus
    notes: str | None
    created_by: int
    created_at: datetime
    completed_at: datetime | None
    lines: Tuple[OrderLine, ...]


def fold_money(values: Iterable[Money], currency: str = "USD") -> Money:
    total = Money.of(0, currency=currency)
    for v in values:
        total = total + v
    return total


def now_utc() -> datetime:
    return datetime.now(timezone.utc)
