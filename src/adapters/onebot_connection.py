"""OneBot WebSocket connection adapter.

Owns the gateway connection lifecycle and implements the core
ReplySenderPort. The loop never terminates on its own: every close or
connection failure is followed by a fixed delay and a new attempt.
"""

from __future__ import annotations

import asyncio
import json
import logging
import random
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

import settings
from adapters.onebot_mapper import parse_frame
from core.models import InboundEvent, OutboundMessage

LOGGER = logging.getLogger(__name__)

EventHandler = Callable[[InboundEvent], Awaitable[Any]]


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class OneBotConnection:
    """Duplex gateway connection with jittered sends and reconnect-forever."""

    def __init__(
        self,
        url: str,
        access_token: str = "",
        *,
        reconnect_delay: float = settings.RECONNECT_DELAY,
        jitter: tuple[float, float] = settings.SEND_JITTER,
        connect: Callable[..., Any] = websockets.connect,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        random_delay: Optional[Callable[[], float]] = None,
    ) -> None:
        self._url = url
        self._access_token = access_token
        self._reconnect_delay = reconnect_delay
        self._connect = connect
        self._sleep = sleep
        self._random_delay = random_delay or (lambda: random.uniform(*jitter))
        self._ws: Any = None
        self._state = ConnectionState.DISCONNECTED
        self._stopped = False
        self._tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is ConnectionState.CONNECTED and self._ws is not None

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": settings.GATEWAY_USER_AGENT}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    async def run_forever(self, handler: EventHandler) -> None:
        """Connect, dispatch events to ``handler`` and reconnect until stopped."""

        self._stopped = False
        try:
            while not self._stopped:
                await self._run_once(handler)
                if self._stopped:
                    break
                LOGGER.warning("Gateway connection lost, reconnecting in %ss", self._reconnect_delay)
                await self._sleep(self._reconnect_delay)
        finally:
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)

    async def stop(self) -> None:
        self._stopped = True
        ws = self._ws
        if ws is not None:
            await ws.close()

    async def _run_once(self, handler: EventHandler) -> None:
        self._state = ConnectionState.CONNECTING
        LOGGER.info("Connecting to gateway %s", self._url)
        try:
            async with self._connect(self._url, additional_headers=self._headers()) as ws:
                self._ws = ws
                self._state = ConnectionState.CONNECTED
                LOGGER.info("Connected to gateway")
                async for raw in ws:
                    self._dispatch(raw, handler)
        except ConnectionClosed as exc:
            LOGGER.warning("Gateway connection closed: %s", exc)
        except (OSError, WebSocketException, asyncio.TimeoutError) as exc:
            LOGGER.error("WebSocket error: %s", exc)
        finally:
            self._ws = None
            self._state = ConnectionState.DISCONNECTED

    def _dispatch(self, raw: Union[str, bytes], handler: EventHandler) -> None:
        event = parse_frame(raw)
        if event is None:
            return
        # One task per event: a slow pipeline must not hold up newer frames.
        task = asyncio.create_task(self._handle(event, handler))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _handle(self, event: InboundEvent, handler: EventHandler) -> None:
        try:
            await handler(event)
        except Exception:
            LOGGER.exception("Error while processing message from %s", event.describe())

    async def send(self, message: OutboundMessage) -> bool:
        """Send a reply after a random pause; False when the socket is not open."""

        if not self.is_open:
            LOGGER.debug("Dropping reply to %s: not connected", message.target_id)
            return False
        await self._sleep(self._random_delay())
        ws = self._ws
        if ws is None or not self.is_open:
            LOGGER.debug("Dropping reply to %s: connection lost", message.target_id)
            return False
        try:
            await ws.send(json.dumps(message.to_frame(), ensure_ascii=False))
        except ConnectionClosed:
            LOGGER.debug("Dropping reply to %s: connection closed during send", message.target_id)
            return False
        return True
