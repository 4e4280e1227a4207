from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from returns.result import Result

from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.domain.model.order import OrderId


@dataclass(frozen=True)
class DeleteOrderCommand:
    order_id: int


class DeleteOrderUseCase(Protocol):
    def delete_order(self, command: DeleteOrderCommand) -> Result[OrderId, OrderError]: ...
