"""Plain-dict snapshots of orders, shared by the HTTP responses and the broadcast envelope."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from bakery_pos.core.domain.model.catalog import Customer
from bakery_pos.core.domain.model.order import Order, OrderLine
from bakery_pos.core.ports.inbound.get_order import OrderView


def _iso(ts: datetime | None) -> str | None:
    return ts.isoformat() if ts is not None else None


def line_snapshot(line: OrderLine, order: Order) -> dict[str, Any]:
    return {
        "id": line.line_id,
        "orderId": order.order_id.value,
        "productId": line.product_id,
        "productName": line.product_name,
        "quantity": line.quantity,
        "unitPrice": str(line.unit_price.amount),
        "totalPrice": str(line.line_total.amount),
    }


def customer_snapshot(customer: Customer) -> dict[str, Any]:
    return {
        "id": customer.customer_id,
        "name": customer.name,
        "email": customer.email,
        "phone": customer.phone,
        "address": customer.address,
    }


def order_snapshot(order: Order) -> dict[str, Any]:
    return {
        "id": order.order_id.value,
        "orderNumber": order.order_number.value,
        "customerId": order.customer_id,
        "customerName": order.customer_name,
        "status": order.status.value,
        "subtotal": str(order.subtotal.amount),
        "taxAmount": str(order.tax_amount.amount),
        "total": str(order.total.amount),
        "currency": order.total.currency,
        "paymentMethod": order.payment_method.value if order.payment_method else None,
        "paymentStatus": order.payment_status.value,
        "notes": order.notes,
        "createdBy": order.created_by,
        "createdAt": _iso(order.created_at),
        "completedAt": _iso(order.completed_at),
        "items": [line_snapshot(ln, order) for ln in order.lines],
    }


def order_view_snapshot(view: OrderView) -> dict[str, Any]:
    snap = order_snapshot(view.order)
    snap["customer"] = customer_snapshot(view.customer) if view.customer else None
    return snap
