"""OneBot-to-core event mapping adapter.

This keeps the gateway's JSON frame shape out of the core pipeline. Frames
that are not parseable message events are dropped by returning None.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Union

from core.models import GROUP, InboundEvent, MessageSegment


def _is_numeric_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _segments(message: Any) -> tuple[MessageSegment, ...]:
    # The gateway may send a CQ-coded string instead of a segment array.
    if not isinstance(message, list):
        return ()
    segments = []
    for item in message:
        if not isinstance(item, dict):
            continue
        data = item.get("data")
        segments.append(
            MessageSegment(
                type=str(item.get("type", "")),
                data=data if isinstance(data, dict) else {},
            )
        )
    return tuple(segments)


def build_event(frame: Any) -> Optional[InboundEvent]:
    """Build an InboundEvent from a decoded frame, or None to drop it."""

    if not isinstance(frame, dict) or frame.get("post_type") != "message":
        return None

    message_type = frame.get("message_type")
    user_id = frame.get("user_id")
    group_id = frame.get("group_id")
    is_group = message_type == GROUP

    if is_group and not _is_numeric_id(group_id):
        return None
    if not _is_numeric_id(user_id):
        return None

    raw_message = frame.get("raw_message")
    return InboundEvent(
        post_type="message",
        raw_message=raw_message if isinstance(raw_message, str) else "",
        user_id=user_id,
        group_id=group_id if _is_numeric_id(group_id) else None,
        message_type=str(message_type or ""),
        segments=_segments(frame.get("message")),
    )


def parse_frame(raw: Union[str, bytes]) -> Optional[InboundEvent]:
    """Decode a raw WebSocket frame; unparseable frames yield None."""

    try:
        frame = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        return None
    return build_event(frame)
