"""
Order status transitions.

The permissive policy accepts any status change, matching how terminals have
always been allowed to correct an order. The strict policy only allows the
forward lifecycle and treats completed and cancelled as terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from returns.result import Failure, Result, Success

from bakery_pos.core.domain.model.errors import IllegalTransition, OrderError
from bakery_pos.core.domain.model.order import OrderStatus

Transition = Tuple[OrderStatus, OrderStatus]

STRICT_TRANSITIONS: FrozenSet[Transition] = frozenset(
    {
        (OrderStatus.PLACED, OrderStatus.PROCESSING),
        (OrderStatus.PLACED, OrderStatus.CANCELLED),
        (OrderStatus.PROCESSING, OrderStatus.COMPLETED),
        (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
    }
)

TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset(
    {OrderStatus.COMPLETED, OrderStatus.CANCELLED}
)


@dataclass(frozen=True)
class StatusPolicy:
    strict: bool = False

    def check(
        self, current: OrderStatus, requested: OrderStatus
    ) -> Result[OrderStatus, OrderError]:
        if not self.strict or current == requested:
            return Success(requested)
        if (current, requested) in STRICT_TRANSITIONS:
            return Success(requested)
        reason = (
            f"{current.value} is terminal"
            if current in TERMINAL_STATUSES
            else "transition not allowed"
        )
        return Failure(
            IllegalTransition(
                message=reason, current=current.value, requested=requested.value
            )
        )
