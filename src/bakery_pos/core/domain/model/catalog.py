from __future__ import annotations

from dataclasses import dataclass

from bakery_pos.core.domain.model.order import Money


@dataclass(frozen=True)
class Product:
    product_id: int
    name: str
    price: Money
    category: str | None = None
    stock: int = 0
    is_active: bool = True

    def is_available(self) -> bool:
        return self.is_active and self.stock > 0


@dataclass(frozen=True)
class Customer:
    customer_id: int
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
