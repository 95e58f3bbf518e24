"""Video metadata lookup (core domain)."""

from __future__ import annotations

import logging
from typing import Any, Optional

from core.errors import UpstreamError
from core.models import ContentMetadata, VideoStats
from core.ports import HttpPort

LOGGER = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.bilibili.com/x/web-interface"
API_OK = 0


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def parse_metadata(data: dict[str, Any]) -> ContentMetadata:
    """Map the ``data`` object of a view API response onto ContentMetadata."""

    owner = data.get("owner")
    if not isinstance(owner, dict):
        owner = {}
    stat = data.get("stat")
    if not isinstance(stat, dict):
        stat = {}
    return ContentMetadata(
        title=str(data.get("title", "")),
        bvid=str(data.get("bvid", "")),
        pic=str(data.get("pic", "")),
        tid=_as_int(data.get("tid")),
        owner_name=str(owner.get("name", "")),
        stats=VideoStats(
            view=_as_int(stat.get("view")),
            danmaku=_as_int(stat.get("danmaku")),
            reply=_as_int(stat.get("reply")),
            favorite=_as_int(stat.get("favorite")),
            coin=_as_int(stat.get("coin")),
            share=_as_int(stat.get("share")),
            like=_as_int(stat.get("like")),
        ),
    )


class MetadataFetcher:
    """Fetches video metadata fresh on every call; never retries."""

    def __init__(self, http: HttpPort, api_base: str = DEFAULT_API_BASE) -> None:
        self._http = http
        self._api_base = api_base.rstrip("/")

    async def fetch(self, bvid: str) -> Optional[ContentMetadata]:
        try:
            body = await self._http.get_json(f"{self._api_base}/view", {"bvid": bvid})
        except UpstreamError as exc:
            LOGGER.error("Failed to fetch video info for %s: %s", bvid, exc)
            return None

        if not isinstance(body, dict) or body.get("code") != API_OK:
            message = body.get("message") if isinstance(body, dict) else None
            LOGGER.warning("Video info lookup failed for %s: %s", bvid, message or "unknown error")
            return None

        data = body.get("data")
        if not isinstance(data, dict):
            LOGGER.warning("Video info for %s has no data object", bvid)
            return None

        metadata = parse_metadata(data)
        LOGGER.info("Video info fetched: %s", metadata.title)
        return metadata
