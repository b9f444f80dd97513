# airport_billing/routers/realtime.py

import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from airport_billing.core.auth import principal_from_token
from airport_billing.core.realtime import broadcaster

router = APIRouter(tags=["Realtime"])

logger = logging.getLogger("app")


@router.websocket("/ws/bills")
async def bill_events(websocket: WebSocket, token: str = Query("")):
    # Browsers cannot set Authorization on websockets, so the token comes in the query string
    principal = principal_from_token(token) if token else None

    if principal is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await broadcaster.connect(websocket)
    logger.info(f"Realtime subscriber connected: {principal.role} {principal.id}")

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(websocket)
        logger.info(f"Realtime subscriber disconnected: {principal.role} {principal.id}")
