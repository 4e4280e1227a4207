"""Demo catalog, customers and a morning's worth of orders for a fresh install."""

from __future__ import annotations

import logging
from decimal import Decimal

from returns.result import Failure

from bakery_pos.adapters.outbound.in_memory_catalog import (
    InMemoryCustomerDirectory,
    InMemoryProductCatalog,
)
from bakery_pos.core.domain.model.catalog import Customer, Product
from bakery_pos.core.domain.model.order import Money
from bakery_pos.core.ports.inbound.create_order import (
    CreateOrderUseCase,
    OrderDraft,
    OrderLineDraft,
)

logger = logging.getLogger(__name__)

SEED_USER_ID = 1

PRODUCTS = (
    (1, "Sourdough Artisan Loaf", "8.99", "Artisan Breads", 12),
    (2, "Whole Wheat Honey Bread", "6.99", "Artisan Breads", 8),
    (3, "French Baguette", "4.99", "Artisan Breads", 15),
    (6, "Chocolate Fudge Layer Cake", "45.99", "Cakes & Layer Cakes", 3),
    (11, "Butter Croissants", "12.99", "Pastries & Danish", 20),
    (12, "Pain au Chocolat", "4.99", "Pastries & Danish", 15),
    (14, "Cheese Danish", "4.49", "Pastries & Danish", 18),
    (16, "Blueberry Muffins", "15.99", "Muffins & Cupcakes", 10),
    (21, "Chocolate Chip Cookies", "18.99", "Cookies & Bars", 15),
    (23, "Double Fudge Brownies", "22.99", "Cookies & Bars", 8),
    (26, "Apple Pie", "24.99", "Pies & Tarts", 4),
    (29, "Quiche Lorraine", "26.99", "Pies & Tarts", 0),
)

CUSTOMERS = (
    (1, "Sarah Williams", "sarah.w@email.com", "555-0123", "123 Maple Avenue, Downtown"),
    (2, "Michael Chen", "m.chen@email.com", "555-0124", "456 Oak Street, Midtown"),
    (3, "Jennifer Martinez", "j.martinez@email.com", "555-0125", "789 Pine Road, Uptown"),
    (4, "Robert Johnson", "rob.johnson@email.com", "555-0126", "321 Elm Drive, Westside"),
)

# customer_id, status, payment_method, payment_status, subtotal, tax, total, lines
ORDERS = (
    (1, "completed", "card", "paid", "33.97", "2.89", "36.86",
     ((1, 2), (16, 1))),
    (2, "processing", "card", "paid", "45.99", "3.91", "49.90",
     ((6, 1),)),
    (3, "placed", "cash", "pending", "40.95", "3.48", "44.43",
     ((11, 2), (12, 3))),
    (4, "completed", "digital", "paid", "41.98", "3.57", "45.55",
     ((21, 1), (23, 1))),
)


def seed_catalog(
    products: InMemoryProductCatalog,
    customers: InMemoryCustomerDirectory,
    currency: str = "USD",
) -> None:
    for pid, name, price, category, stock in PRODUCTS:
        products.add(
            Product(
                product_id=pid,
                name=name,
                price=Money.of(price, currency),
                category=category,
                stock=stock,
            )
        )
    for cid, name, email, phone, address in CUSTOMERS:
        customers.add(
            Customer(customer_id=cid, name=name, email=email, phone=phone, address=address)
        )


def seed_orders(create_order: CreateOrderUseCase) -> int:
    catalog = {pid: (name, Decimal(price)) for pid, name, price, _, _ in PRODUCTS}
    names = {cid: name for cid, name, *_ in CUSTOMERS}
    created = 0
    for cid, status, method, pay_status, subtotal, tax, total, lines in ORDERS:
        draft = OrderDraft(
            created_by=SEED_USER_ID,
            customer_id=cid,
            customer_name=names[cid],
            status=status,
            payment_method=method,
            payment_status=pay_status,
            subtotal=Decimal(subtotal),
            tax_amount=Decimal(tax),
            total=Decimal(total),
            lines=tuple(
                OrderLineDraft(
                    product_id=pid,
                    product_name=catalog[pid][0],
                    unit_price=catalog[pid][1],
                    quantity=qty,
                )
                for pid, qty in lines
            ),
        )
        result = create_order.create_order(draft)
        if isinstance(result, Failure):
            logger.warning("demo order for customer %s rejected: %s", cid, result.failure())
            continue
        created += 1
    return created
