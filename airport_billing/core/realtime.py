# =========================================================
# REALTIME BILL BROADCASTS
# - Fire-and-forget, no persistence, no replay
# - publish() is safe to call from sync request threads
# =========================================================

import asyncio
import logging

from fastapi import WebSocket

logger = logging.getLogger("app")


class BillBroadcaster:
    def __init__(self):
        self.connections: set[WebSocket] = set()
        self.loop: asyncio.AbstractEventLoop | None = None

    def bind(self, loop: asyncio.AbstractEventLoop | None):
        self.loop = loop

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        # Registered before the hello, so a client that saw it will not miss the next event
        self.connections.add(websocket)
        await websocket.send_json({"event": "connected"})

    def disconnect(self, websocket: WebSocket):
        self.connections.discard(websocket)

    async def broadcast(self, message: dict):
        for websocket in list(self.connections):
            try:
                await websocket.send_json(message)
            except Exception as e:
                logger.warning(f"Dropping realtime subscriber: {str(e)}")
                self.disconnect(websocket)

    def publish(self, event: str, data: dict) -> bool:
        if self.loop is None or self.loop.is_closed():
            logger.debug(f"Realtime '{event}' dropped: no event loop bound")
            return False

        if not self.connections:
            return False

        message = {"event": event, "data": data}

        try:
            future = asyncio.run_coroutine_threadsafe(self.broadcast(message), self.loop)
        except RuntimeError as e:
            logger.error(f"Realtime publish failed: {str(e)}")
            return False

        future.add_done_callback(_log_failure)
        return True


def _log_failure(future):
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error(f"Realtime broadcast failed: {str(error)}")


broadcaster = BillBroadcaster()
