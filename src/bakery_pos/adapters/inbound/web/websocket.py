"""WebSocket transport for terminal sessions."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from bakery_pos.core.domain.model.errors import DeliveryFailure
from bakery_pos.core.domain.service.realtime_notifier import RealtimeNotifier

logger = logging.getLogger(__name__)


class WebSocketConnection:
    """
    One terminal socket with its own outbox and sender task.

    ``send`` only schedules the message onto the socket's event loop, so it is
    safe to call from request handlers running in the threadpool and never
    waits on the network. Messages leave in the order they were queued.
    """

    def __init__(self, websocket: WebSocket, loop: asyncio.AbstractEventLoop) -> None:
        self._websocket = websocket
        self._loop = loop
        self._outbox: asyncio.Queue[str] = asyncio.Queue()
        self._closed = False
        client = websocket.client
        self.label = f"{client.host}:{client.port}" if client else f"ws-{id(self):x}"

    def is_ready(self) -> bool:
        return (
            not self._closed
            and self._websocket.client_state == WebSocketState.CONNECTED
            and self._websocket.application_state == WebSocketState.CONNECTED
        )

    def send(self, message: str) -> None:
        self._loop.call_soon_threadsafe(self._outbox.put_nowait, message)

    def close(self) -> None:
        self._closed = True

    async def pump(self) -> None:
        while True:
            message = await self._outbox.get()
            try:
                await self._websocket.send_text(message)
            except Exception as exc:  # noqa: BLE001
                # the receive loop unregisters us once the transport reports the close
                self._closed = True
                logger.warning("%s", DeliveryFailure(message=str(exc), connection=self.label))
                return


async def serve_terminal(websocket: WebSocket, notifier: RealtimeNotifier) -> None:
    await websocket.accept()
    conn = WebSocketConnection(websocket, asyncio.get_running_loop())
    sender = asyncio.create_task(conn.pump())
    notifier.register_connection(conn)
    conn.send(json.dumps({"type": "CONNECTED", "data": {"terminal": conn.label}}))
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            # terminals only listen; anything they send is ignored
    finally:
        conn.close()
        notifier.unregister_connection(conn)
        sender.cancel()
