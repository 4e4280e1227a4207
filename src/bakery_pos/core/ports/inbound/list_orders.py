from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Sequence

from returns.result import Result

from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.ports.inbound.get_order import OrderView


@dataclass(frozen=True)
class ListOrdersQuery:
    status: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    newest_first: bool = False
    limit: int | None = None


class ListOrdersUseCase(Protocol):
    def list_orders(
        self, query: ListOrdersQuery
    ) -> Result[Sequence[OrderView], OrderError]: ...
