"""
Push-channel WebSocket route.

  WS /ws: live metrics broadcast and chat assistant
"""

from fastapi import APIRouter, WebSocket

from smartops.connections import manager

router = APIRouter(tags=["Channel"])


@router.websocket("/ws")
async def channel(websocket: WebSocket):
    connection = await manager.connect(websocket)
    try:
        while connection.open:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            await manager.handle_message(connection, raw)
    finally:
        manager.disconnect(connection)
