from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import FastAPI

from bakery_pos.adapters.inbound.web.fastapi_app import create_app
from bakery_pos.adapters.outbound.demo_seed import seed_catalog, seed_orders
from bakery_pos.adapters.outbound.in_memory_catalog import (
    InMemoryCustomerDirectory,
    InMemoryProductCatalog,
)
from bakery_pos.adapters.outbound.in_memory_orders import InMemoryOrderStore
from bakery_pos.core.domain.service.create_order_service import (
    CreateOrderDeps,
    CreateOrderService,
)
from bakery_pos.core.domain.service.dashboard_service import (
    DashboardDeps,
    DashboardService,
)
from bakery_pos.core.domain.service.delete_order_service import (
    DeleteOrderDeps,
    DeleteOrderService,
)
from bakery_pos.core.domain.service.get_order_service import (
    GetOrderDeps,
    GetOrderService,
)
from bakery_pos.core.domain.service.list_orders_service import (
    ListOrdersDeps,
    ListOrdersService,
)
from bakery_pos.core.domain.service.realtime_notifier import RealtimeNotifier
from bakery_pos.core.domain.service.status_policy import StatusPolicy
from bakery_pos.core.domain.service.update_order_service import (
    UpdateOrderDeps,
    UpdateOrderService,
)
from bakery_pos.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UseCases:
    create_order: CreateOrderService
    update_order: UpdateOrderService
    delete_order: DeleteOrderService
    get_order: GetOrderService
    list_orders: ListOrdersService
    dashboard: DashboardService
    notifier: RealtimeNotifier


def build_usecases(settings: Settings | None = None) -> UseCases:
    settings = settings or Settings()

    orders = InMemoryOrderStore(order_number_start=settings.order_number_start)
    products = InMemoryProductCatalog()
    customers = InMemoryCustomerDirectory()
    notifier = RealtimeNotifier()

    create_order = CreateOrderService(
        CreateOrderDeps(
            orders=orders,
            customers=customers,
            events=notifier,
            tax_rate=settings.tax_rate,
            currency=settings.currency,
        )
    )
    usecases = UseCases(
        create_order=create_order,
        update_order=UpdateOrderService(
            UpdateOrderDeps(
                orders=orders,
                customers=customers,
                events=notifier,
                policy=StatusPolicy(strict=settings.strict_transitions),
            )
        ),
        delete_order=DeleteOrderService(DeleteOrderDeps(orders=orders, events=notifier)),
        get_order=GetOrderService(GetOrderDeps(orders=orders, customers=customers)),
        list_orders=ListOrdersService(ListOrdersDeps(orders=orders, customers=customers)),
        dashboard=DashboardService(
            DashboardDeps(orders=orders, products=products, currency=settings.currency)
        ),
        notifier=notifier,
    )

    if settings.seed_demo_data:
        seed_catalog(products, customers, currency=settings.currency)
        created = seed_orders(create_order)
        logger.info("seeded demo data: %d products, %d orders", len(products.products_by_id), created)

    return usecases


def build_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    return create_app(build_usecases(settings), cors_origins=settings.cors_origins)


def create_asgi_app() -> FastAPI:
    return build_app()
