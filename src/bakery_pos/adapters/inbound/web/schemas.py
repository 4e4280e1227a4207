"""HTTP DTOs. Field names follow the camelCase JSON the terminals already speak."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class OrderItemIn(BaseModel):
    productId: int = Field(gt=0, examples=[1])
    productName: str = Field(min_length=1, examples=["Sourdough Artisan Loaf"])
    quantity: int = Field(gt=0, examples=[2])
    unitPrice: Decimal = Field(ge=0, examples=["8.99"])
    totalPrice: Decimal | None = Field(default=None, ge=0, examples=["17.98"])


class CreateOrderRequest(BaseModel):
    createdBy: int = Field(gt=0, examples=[1])
    items: list[OrderItemIn] = Field(min_length=1)
    customerId: int | None = Field(default=None, gt=0)
    customerName: str | None = Field(default=None, examples=["Jane"])
    status: str | None = Field(default=None, examples=["placed"])
    subtotal: Decimal | None = Field(default=None, ge=0)
    taxAmount: Decimal | None = Field(default=None, ge=0)
    total: Decimal | None = Field(default=None, ge=0)
    paymentMethod: str | None = Field(default=None, examples=["card"])
    paymentStatus: str | None = Field(default=None, examples=["pending"])
    notes: str | None = None


class UpdateOrderRequest(BaseModel):
    status: str | None = Field(default=None, examples=["processing"])
    paymentMethod: str | None = None
    paymentStatus: str | None = None
    notes: str | None = None
    customerId: int | None = None
    customerName: str | None = None


class CustomerOut(BaseModel):
    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class OrderItemOut(BaseModel):
    id: int | None
    orderId: int
    productId: int
    productName: str
    quantity: int
    unitPrice: str
    totalPrice: str


class OrderOut(BaseModel):
    id: int
    orderNumber: str
    customerId: int | None
    customerName: str | None
    status: str
    subtotal: str
    taxAmount: str
    total: str
    currency: str
    paymentMethod: str | None
    paymentStatus: str
    notes: str | None
    createdBy: int
    createdAt: str
    completedAt: str | None
    items: list[OrderItemOut]
    customer: CustomerOut | None = None


class DeletedOut(BaseModel):
    id: int
    message: str


class DashboardStatsOut(BaseModel):
    todayOrders: int
    revenue: str
    pendingOrders: int
    activeProducts: int


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: list[dict[str, Any]] | None = None
