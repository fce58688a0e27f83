from fastapi import APIRouter, WebSocket, WebSocketDisconnect
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

@router.websocket("/ws")
async def realtime_endpoint(websocket: WebSocket):
    """
    Live channel. The server only pushes change events; anything a client
    sends is read and discarded so the connection stays alive.
    """
    manager = websocket.app.state.broadcaster
    await manager.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
