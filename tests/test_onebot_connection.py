from __future__ import annotations

import asyncio
import json
from typing import Any

from adapters.onebot_connection import ConnectionState, OneBotConnection
from core.models import OutboundMessage


class FakeWebSocket:
    def __init__(self, frames: list[Any]) -> None:
        self._frames = frames
        self.sent: list[str] = []
        self.closed = asyncio.Event()

    async def send(self, data: str) -> None:
        self.sent.append(data)

    async def close(self) -> None:
        self.closed.set()

    async def __aiter__(self):
        for frame in self._frames:
            yield frame
        await self.closed.wait()


class FakeConnect:
    def __init__(self, sockets: list[Any]) -> None:
        self._sockets = sockets
        self.calls: list[tuple[str, dict[str, str]]] = []

    def __call__(self, url: str, additional_headers: dict[str, str]) -> "FakeConnect":
        self.calls.append((url, additional_headers))
        self._current = self._sockets.pop(0)
        return self

    async def __aenter__(self) -> FakeWebSocket:
        if isinstance(self._current, Exception):
            raise self._current
        return self._current

    async def __aexit__(self, *exc_info: Any) -> None:
        return None


def _message_frame(text: str, user_id: Any = 42) -> str:
    return json.dumps(
        {"post_type": "message", "message_type": "private", "raw_message": text, "user_id": user_id}
    )


def test_events_are_dispatched_and_replies_sent() -> None:
    async def scenario() -> tuple[list[str], FakeWebSocket, FakeConnect, list[float]]:
        ws = FakeWebSocket(
            [
                "garbage",
                json.dumps({"post_type": "notice"}),
                _message_frame("bad id", user_id="42"),
                _message_frame("hello"),
            ]
        )
        connect = FakeConnect([ws])
        delays: list[float] = []

        async def fake_sleep(delay: float) -> None:
            delays.append(delay)

        connection = OneBotConnection(
            "ws://gateway/ws",
            "token",
            connect=connect,
            sleep=fake_sleep,
            random_delay=lambda: 0.75,
        )
        seen: list[str] = []

        async def handler(event) -> None:
            seen.append(event.raw_message)
            assert connection.state is ConnectionState.CONNECTED
            sent = await connection.send(OutboundMessage(False, event.user_id, "pong"))
            assert sent is True
            await connection.stop()

        await connection.run_forever(handler)
        assert connection.state is ConnectionState.DISCONNECTED
        return seen, ws, connect, delays

    seen, ws, connect, delays = asyncio.run(scenario())

    assert seen == ["hello"]
    assert json.loads(ws.sent[0]) == {
        "action": "send_private_msg",
        "params": {"user_id": 42, "message": "pong"},
    }
    assert delays == [0.75]
    url, headers = connect.calls[0]
    assert url == "ws://gateway/ws"
    assert headers["Authorization"] == "Bearer token"
    assert headers["User-Agent"] == "BilibiliBot/1.0"


def test_reconnects_after_failures_with_fixed_delay() -> None:
    async def scenario() -> tuple[list[float], FakeConnect]:
        connect = FakeConnect([OSError("refused"), OSError("refused"), OSError("refused")])
        delays: list[float] = []
        connection: OneBotConnection

        async def fake_sleep(delay: float) -> None:
            delays.append(delay)
            if len(delays) == 3:
                await connection.stop()

        connection = OneBotConnection("ws://gateway/ws", connect=connect, sleep=fake_sleep)
        await connection.run_forever(lambda event: asyncio.sleep(0))
        return delays, connect

    delays, connect = asyncio.run(scenario())

    assert delays == [5.0, 5.0, 5.0]
    assert len(connect.calls) == 3
    assert "Authorization" not in connect.calls[0][1]


def test_send_without_connection_is_skipped() -> None:
    slept: list[float] = []

    async def fake_sleep(delay: float) -> None:
        slept.append(delay)

    connection = OneBotConnection("ws://gateway/ws", sleep=fake_sleep)
    sent = asyncio.run(connection.send(OutboundMessage(True, 555, "hi")))
    assert sent is False
    assert slept == []


def test_handler_errors_do_not_stop_the_loop() -> None:
    async def scenario() -> list[str]:
        ws = FakeWebSocket([_message_frame("boom"), _message_frame("after")])
        connection = OneBotConnection("ws://gateway/ws", connect=FakeConnect([ws]))
        seen: list[str] = []

        async def handler(event) -> None:
            seen.append(event.raw_message)
            if event.raw_message == "boom":
                raise RuntimeError("pipeline failed")
            await connection.stop()

        await connection.run_forever(handler)
        return seen

    assert asyncio.run(scenario()) == ["boom", "after"]


def test_deeply_nested_frame_does_not_end_the_loop() -> None:
    async def scenario() -> tuple[list[str], FakeConnect]:
        ws = FakeWebSocket(["[" * 100_000, _message_frame("after")])
        connect = FakeConnect([ws])
        connection = OneBotConnection("ws://gateway/ws", connect=connect)
        seen: list[str] = []

        async def handler(event) -> None:
            seen.append(event.raw_message)
            await connection.stop()

        await connection.run_forever(handler)
        return seen, connect

    seen, connect = asyncio.run(scenario())

    assert seen == ["after"]
    assert len(connect.calls) == 1
