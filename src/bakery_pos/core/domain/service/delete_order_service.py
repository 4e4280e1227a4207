from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from returns.result import Result

from bakery_pos.core.domain.model.errors import OrderError
from bakery_pos.core.domain.model.order import OrderId, OrderLine
from bakery_pos.core.ports.inbound.delete_order import (
    DeleteOrderCommand,
    DeleteOrderUseCase,
)
from bakery_pos.core.ports.outbound.events import EventPublisher, OrderDeleted
from bakery_pos.core.ports.outbound.orders import OrderStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteOrderDeps:
    orders: OrderStore
    events: EventPublisher


@dataclass(frozen=True)
class DeleteOrderService(DeleteOrderUseCase):
    deps: DeleteOrderDeps

    def delete_order(self, command: DeleteOrderCommand) -> Result[OrderId, OrderError]:
        order_id = OrderId(command.order_id)
        return self.deps.orders.lines_for(order_id).bind(
            lambda lines: self.deps.orders.delete(order_id).bind(
                lambda deleted: self._publish(deleted, lines)
            )
        )

    def _publish(
        self, order_id: OrderId, lines: Sequence[OrderLine]
    ) -> Result[OrderId, OrderError]:
        logger.info("order deleted: id=%s (%d lines)", order_id.value, len(lines))
        return self.deps.events.publish(OrderDeleted(order_id)).map(lambda _: order_id)
