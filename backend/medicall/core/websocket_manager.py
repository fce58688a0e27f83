"""
WebSocket connection registry for real-time sync.

Every change committed by the sync routes is pushed to all connected clients,
the one that made the change included. Delivery is best effort: no
acknowledgement and no replay for clients that reconnect after a gap.
"""

from fastapi import WebSocket
from typing import Any, Set
import logging

from medicall.config.constants import EventName

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks live WebSocket connections and broadcasts change events to them."""

    def __init__(self):
        self.active_connections: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket):
        """Accept and register a WebSocket connection"""
        await websocket.accept()
        self.active_connections.add(websocket)
        logger.info(f"WebSocket connected ({self.get_connection_count()} active)")

    def disconnect(self, websocket: WebSocket):
        """Remove a WebSocket connection"""
        self.active_connections.discard(websocket)
        logger.info(f"WebSocket disconnected ({self.get_connection_count()} active)")

    async def broadcast(self, event: EventName, payload: Any):
        """Send ``{"event": ..., "data": ...}`` to every connection"""
        message = {"event": EventName(event).value, "data": payload}
        disconnected = set()

        # iterate over a copy, connect/disconnect may run while we await sends
        for connection in list(self.active_connections):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.error(f"Failed to broadcast {message['event']}: {e}")
                disconnected.add(connection)

        # Clean up dead connections
        for conn in disconnected:
            self.active_connections.discard(conn)

        logger.debug(
            f"Broadcast {message['event']} to "
            f"{self.get_connection_count()} connection(s)"
        )

    def get_connection_count(self) -> int:
        """Get total number of active connections"""
        return len(self.active_connections)
