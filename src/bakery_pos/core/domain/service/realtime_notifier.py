"""
Fan-out of order lifecycle events to every connected terminal.

Delivery is best effort and at most once: a connection that is not ready
when an event fires never sees it, and nothing is buffered for replay.
Terminals refetch on reconnect.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Set

from returns.result import Result, Success

from bakery_pos.core.domain.model.errors import DeliveryFailure, OrderError
from bakery_pos.core.ports.outbound.connections import Connection
from bakery_pos.core.ports.outbound.events import EventPublisher, OrderEvent, envelope

logger = logging.getLogger(__name__)


@dataclass
class RealtimeNotifier(EventPublisher):
    _connections: Set[Connection] = field(default_factory=set)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def register_connection(self, conn: Connection) -> None:
        with self._lock:
            self._connections.add(conn)
            count = len(self._connections)
        logger.info("terminal connected: %s (%d live)", conn.label, count)

    def unregister_connection(self, conn: Connection) -> None:
        with self._lock:
            if conn not in self._connections:
                return
            self._connections.discard(conn)
            count = len(self._connections)
        logger.info("terminal disconnected: %s (%d live)", conn.label, count)

    def connection_count(self) -> int:
        with self._lock:
            return len(self._connections)

    def broadcast(self, event: OrderEvent) -> int:
        """Returns how many connections were handed the message."""
        message = json.dumps(envelope(event), ensure_ascii=False, separators=(",", ":"))

        with self._lock:
            targets = tuple(self._connections)

        delivered = 0
        for conn in targets:
            if not conn.is_ready():
                continue
            try:
                conn.send(message)
            except Exception as exc:  # noqa: BLE001
                failure = DeliveryFailure(message=str(exc), connection=conn.label)
                logger.warning("%s", failure)
                continue
            delivered += 1

        logger.debug("broadcast %s to %d/%d terminals", event.type, delivered, len(targets))
        return delivered

    def publish(self, event: OrderEvent) -> Result[None, OrderError]:
        self.broadcast(event)
        return Success(None)
