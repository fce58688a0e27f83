"""
Client side of the real-time broadcast channel.

Connects to the server's ``/ws`` endpoint and hands every ``{"event", "data"}``
frame to a callback. Reconnection is bounded: after ``reconnection_attempts``
consecutive failures the channel gives up quietly and simply stays
disconnected.
"""

import asyncio
import json
import logging
from typing import Any, Callable, Optional

import websockets
from websockets.exceptions import WebSocketException

logger = logging.getLogger(__name__)

EventHandler = Callable[[str, Any], None]


class LiveChannel:
    def __init__(
        self,
        url: str,
        on_event: EventHandler,
        on_connect: Optional[Callable[[], None]] = None,
        on_disconnect: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        reconnection_attempts: int = 10,
        reconnection_delay: float = 3.0,
        timeout: float = 20.0,
        connect: Callable[..., Any] = websockets.connect,
    ):
        self.url = url
        self.reconnection_attempts = reconnection_attempts
        self.reconnection_delay = reconnection_delay
        self.timeout = timeout

        self._on_event = on_event
        self._on_connect = on_connect or (lambda: None)
        self._on_disconnect = on_disconnect or (lambda: None)
        self._on_error = on_error or (lambda exc: None)
        self._connect = connect

        self._task: Optional[asyncio.Task] = None
        self._stopped = False
        self.connected = False
        self.attempts = 0

    def start(self) -> None:
        if self._task is None or self._task.done():
            self._stopped = False
            self._task = asyncio.create_task(self._run(), name=f"live-channel:{self.url}")

    async def stop(self) -> None:
        self._stopped = True
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def wait_closed(self) -> None:
        """Wait until the channel stops on its own (gave up or was stopped)."""
        if self._task:
            await asyncio.shield(self._task)

    async def _run(self) -> None:
        failures = 0
        while not self._stopped:
            self.attempts += 1
            try:
                async with self._connect(self.url, open_timeout=self.timeout) as ws:
                    failures = 0
                    self.connected = True
                    logger.info(f"Live channel connected to {self.url}")
                    self._on_connect()
                    async for raw in ws:
                        self._dispatch(raw)
            except (OSError, asyncio.TimeoutError, WebSocketException) as e:
                if not self.connected:
                    logger.debug(f"Live channel connect error: {e}")
                    self._on_error(e)
                else:
                    logger.info(f"Live channel dropped: {e}")
            finally:
                if self.connected:
                    self.connected = False
                    logger.info("Live channel disconnected")
                    self._on_disconnect()

            if self._stopped:
                break
            failures += 1
            if failures > self.reconnection_attempts:
                logger.warning(
                    f"Live channel gave up after {self.reconnection_attempts} reconnection attempts"
                )
                break
            await asyncio.sleep(self.reconnection_delay)

    def _dispatch(self, raw: Any) -> None:
        try:
            message = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            logger.warning("Live channel received a non-JSON frame, ignoring it")
            return
        if not isinstance(message, dict) or "event" not in message:
            logger.warning("Live channel received a frame without an event name, ignoring it")
            return
        self._on_event(message["event"], message.get("data"))
