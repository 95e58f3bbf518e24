"""Bilibili reference extraction (core domain).

Strategies run in a fixed order and each returns an optional match; the
first one that finds something wins. Only one reference is taken per event,
even when a message carries several links.
"""

from __future__ import annotations

import json
import re
from typing import Callable, Optional

from core.models import ExtractedReference, InboundEvent

MINIPROGRAM = "miniprogram"
TEXT_SHARE = "text_share"

# QQ mini-program app id issued to Bilibili.
BILIBILI_APPID = "1109937557"

SHORT_LINK_RE = re.compile(r"(https?://b23\.tv/[a-zA-Z0-9]+)")
VIDEO_LINK_RE = re.compile(r"(https?://(?:www\.)?bilibili\.com/video/(?:BV[a-zA-Z0-9]+|av[0-9]+)\S*)")


def _from_card(event: InboundEvent) -> Optional[ExtractedReference]:
    segment = next((seg for seg in event.segments if seg.type == "json"), None)
    if segment is None:
        return None
    payload = segment.data.get("data")
    if not isinstance(payload, str):
        return None
    try:
        card = json.loads(payload)
        detail = card["meta"]["detail_1"]
        if detail.get("appid") != BILIBILI_APPID:
            return None
        url = detail.get("qqdocurl")
    except (ValueError, KeyError, TypeError, AttributeError, RecursionError):
        return None
    if not isinstance(url, str) or not url:
        return None
    return ExtractedReference(url=url, provenance=MINIPROGRAM, needs_normalization=True)


def _from_short_link(event: InboundEvent) -> Optional[ExtractedReference]:
    match = SHORT_LINK_RE.search(event.raw_message)
    if not match:
        return None
    return ExtractedReference(url=match.group(1), provenance=TEXT_SHARE, needs_normalization=False)


def _from_video_link(event: InboundEvent) -> Optional[ExtractedReference]:
    match = VIDEO_LINK_RE.search(event.raw_message)
    if not match:
        return None
    return ExtractedReference(url=match.group(1), provenance=TEXT_SHARE, needs_normalization=True)


STRATEGIES: tuple[Callable[[InboundEvent], Optional[ExtractedReference]], ...] = (
    _from_card,
    _from_short_link,
    _from_video_link,
)


def extract_reference(event: InboundEvent) -> Optional[ExtractedReference]:
    """Return the first Bilibili reference found in the event, if any."""

    for strategy in STRATEGIES:
        reference = strategy(event)
        if reference is not None:
            return reference
    return None
