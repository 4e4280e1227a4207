from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class ValidationError(OrderError):
    pass


@dataclass(frozen=True)
class IllegalTransition(ValidationError):
    current: str
    requested: str

    def __str__(self) -> str:  # pragma: no cover
        return f"illegal_transition: {self.current} -> {self.requested} ({self.message})"


@dataclass(frozen=True)
class PersistenceError(OrderError):
    pass


@dataclass(frozen=True)
class OrderNotFound(PersistenceError):
    order_ref: str

    def __str__(self) -> str:  # pragma: no cover
        return f"order_not_found: {self.order_ref} ({self.message})"


@dataclass(frozen=True)
class DeliveryFailure(OrderError):
    connection: str

    def __str__(self) -> str:  # pragma: no cover
        return f"delivery_failure: {self.connection} ({self.message})"
