from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Callable, Sequence

from returns.result import Result

from bakery_pos.core.domain.model.catalog import Product
from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.domain.model.order import Order, OrderStatus, fold_money, now_utc
from bakery_pos.core.ports.inbound.dashboard import DashboardStats, DashboardUseCase
from bakery_pos.core.ports.outbound.catalog import ProductCatalog
from bakery_pos.core.ports.outbound.orders import OrderStore

PENDING_STATUSES = frozenset({OrderStatus.PLACED, OrderStatus.PROCESSING})


@dataclass(frozen=True)
class DashboardDeps:
    orders: OrderStore
    products: ProductCatalog
    currency: str = "USD"
    clock: Callable[[], datetime] = now_utc


@dataclass(frozen=True)
class DashboardService(DashboardUseCase):
    deps: DashboardDeps

    def dashboard_stats(self) -> Result[DashboardStats, OrderError]:
        return self.deps.orders.list().bind(
            lambda orders: self.deps.products.list_products().map(
                lambda products: self._project(orders, products)
            )
        )

    def _project(
        self, orders: Sequence[Order], products: Sequence[Product]
    ) -> DashboardStats:
        start, end = local_day_bounds(self.deps.clock())
        today = [o for o in orders if start <= o.created_at < end]
        revenue = fold_money(
            (o.total for o in today if o.status == OrderStatus.COMPLETED),
            currency=self.deps.currency,
        )
        return DashboardStats(
            today_orders=len(today),
            revenue=revenue,
            pending_orders=sum(1 for o in orders if o.status in PENDING_STATUSES),
            active_products=sum(1 for p in products if p.is_available()),
        )


def local_day_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Local midnight of ``now``'s day and the following midnight, both tz-aware."""
    day = now.astimezone().date()
    # each midnight gets its own offset; DST days are 23 or 25 hours long
    start = datetime.combine(day, time.min).astimezone()
    end = datetime.combine(day + timedelta(days=1), time.min).astimezone()
    return start, end
