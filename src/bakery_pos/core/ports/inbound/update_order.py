from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Protocol

from returns.result import Result

from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.ports.inbound.get_order import OrderView


class _Unset:
    """Marks a patch field the caller did not send (distinct from an explicit null)."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class OrderPatch:
    status: str | _Unset = UNSET
    payment_method: str | None | _Unset = UNSET
    payment_status: str | _Unset = UNSET
    notes: str | None | _Unset = UNSET
    customer_id: int | None | _Unset = UNSET
    customer_name: str | None | _Unset = UNSET

    def provided(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


@dataclass(frozen=True)
class UpdateOrderCommand:
    order_id: int
    patch: OrderPatch


class UpdateOrderUseCase(Protocol):
    def update_order(
        self, command: UpdateOrderCommand
    ) -> Result[OrderView, OrderError]: ...
