"""Shared fixtures: in-memory adapters, a controllable clock and a recording publisher."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from returns.result import Success

from bakery_pos.adapters.outbound.in_memory_catalog import (
    InMemoryCustomerDirectory,
    InMemoryProductCatalog,
)
from bakery_pos.adapters.outbound.in_memory_orders import InMemoryOrderStore
from bakery_pos.core.domain.model.catalog import Customer, Product
from bakery_pos.core.domain.model.order import Money
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
from bakery_pos.core.domain.service.status_policy import StatusPolicy
from bakery_pos.core.domain.service.update_order_service import (
    UpdateOrderDeps,
    UpdateOrderService,
)
from bakery_pos.core.ports.inbound.create_order import OrderDraft, OrderLineDraft


class FakeClock:
    """Callable clock pinned to local noon today; ``advance`` moves it forward."""

    def __init__(self) -> None:
        self.now = datetime.now().astimezone().replace(
            hour=12, minute=0, second=0, microsecond=0
        )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@dataclass
class RecordingPublisher:
    events: list = field(default_factory=list)

    def publish(self, event):
        self.events.append(event)
        return Success(None)


def jane_draft(**overrides) -> OrderDraft:
    fields = dict(
        created_by=1,
        customer_name="Jane",
        lines=(
            OrderLineDraft(
                product_id=7,
                product_name="Sourdough Loaf",
                unit_price=Decimal("8.99"),
                quantity=2,
            ),
        ),
    )
    fields.update(overrides)
    return OrderDraft(**fields)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture()
def store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture()
def customers() -> InMemoryCustomerDirectory:
    directory = InMemoryCustomerDirectory()
    directory.add(Customer(customer_id=1, name="Sarah Williams", phone="555-0123"))
    directory.add(Customer(customer_id=2, name="Michael Chen"))
    return directory


@pytest.fixture()
def products() -> InMemoryProductCatalog:
    catalog = InMemoryProductCatalog()
    catalog.add(Product(product_id=1, name="Sourdough Artisan Loaf", price=Money.of("8.99"), stock=12))
    catalog.add(Product(product_id=2, name="Red Velvet Cake", price=Money.of("42.99"), stock=0))
    catalog.add(
        Product(product_id=3, name="Pecan Pie", price=Money.of("27.99"), stock=2, is_active=False)
    )
    catalog.add(Product(product_id=4, name="Cheese Danish", price=Money.of("4.49"), stock=18))
    return catalog


@pytest.fixture()
def create_service(store, customers, publisher, clock) -> CreateOrderService:
    return CreateOrderService(
        CreateOrderDeps(
            orders=store,
            customers=customers,
            events=publisher,
            tax_rate=Decimal("8.5"),
            clock=clock,
        )
    )


@pytest.fixture()
def update_service(store, customers, publisher, clock) -> UpdateOrderService:
    return UpdateOrderService(
        UpdateOrderDeps(orders=store, customers=customers, events=publisher, clock=clock)
    )


@pytest.fixture()
def strict_update_service(store, customers, publisher, clock) -> UpdateOrderService:
    return UpdateOrderService(
        UpdateOrderDeps(
            orders=store,
            customers=customers,
            events=publisher,
            policy=StatusPolicy(strict=True),
            clock=clock,
        )
    )


@pytest.fixture()
def delete_service(store, publisher) -> DeleteOrderService:
    return DeleteOrderService(DeleteOrderDeps(orders=store, events=publisher))


@pytest.fixture()
def get_service(store, customers) -> GetOrderService:
    return GetOrderService(GetOrderDeps(orders=store, customers=customers))


@pytest.fixture()
def list_service(store, customers) -> ListOrdersService:
    return ListOrdersService(ListOrdersDeps(orders=store, customers=customers))


@pytest.fixture()
def dashboard_service(store, products, clock) -> DashboardService:
    return DashboardService(DashboardDeps(orders=store, products=products, clock=clock))


@pytest.fixture()
def make_draft():
    return jane_draft
