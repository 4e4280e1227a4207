from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from returns.result import Result

from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.domain.model.order import Money


@dataclass(frozen=True)
class DashboardStats:
    today_orders: int
    revenue: Money
    pending_orders: int
    active_products: int


class DashboardUseCase(Protocol):
    def dashboard_stats(self) -> Result[DashboardStats, OrderError]: ...
