"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to OneBot frames or Bilibili API payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

GROUP = "group"
PRIVATE = "private"


def normalize_id(value: Any) -> str:
    """Return the canonical string form of a QQ user or group id.

    Ids arrive as integers in frames but are stored as strings in the
    allow-list and owner setting; every comparison goes through here.
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return str(int(value))
    return str(value).strip()


@dataclass(frozen=True)
class MessageSegment:
    """One element of a OneBot message array."""

    type: str
    data: dict[str, Any]


@dataclass(frozen=True)
class InboundEvent:
    """A validated message event received from the gateway."""

    post_type: str
    raw_message: str
    user_id: int
    group_id: Optional[int]
    message_type: str
    segments: tuple[MessageSegment, ...] = ()

    @property
    def is_group(self) -> bool:
        return self.message_type == GROUP

    @property
    def target_id(self) -> int:
        """Id replies go to: the group for group events, else the sender."""

        if self.is_group and self.group_id is not None:
            return self.group_id
        return self.user_id

    def describe(self) -> str:
        if self.is_group:
            return f"group:{self.group_id}"
        return f"private:{self.user_id}"


@dataclass(frozen=True)
class ExtractedReference:
    """A Bilibili link found in an event, tagged with where it came from."""

    url: str
    provenance: str
    needs_normalization: bool


@dataclass(frozen=True)
class VideoStats:
    view: int = 0
    danmaku: int = 0
    reply: int = 0
    favorite: int = 0
    coin: int = 0
    share: int = 0
    like: int = 0


@dataclass(frozen=True)
class ContentMetadata:
    """Video metadata as returned by the Bilibili view API."""

    title: str
    bvid: str
    pic: str
    tid: int
    owner_name: str
    stats: VideoStats


@dataclass(frozen=True)
class OutboundMessage:
    """A reply addressed to a group or a private chat."""

    is_group: bool
    target_id: int
    text: str

    def to_frame(self) -> dict[str, Any]:
        if self.is_group:
            return {
                "action": "send_group_msg",
                "params": {"group_id": self.target_id, "message": self.text},
            }
        return {
            "action": "send_private_msg",
            "params": {"user_id": self.target_id, "message": self.text},
        }
