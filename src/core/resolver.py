"""BV identifier resolution (core domain)."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urlsplit

from core.errors import UpstreamError
from core.ports import HttpPort

LOGGER = logging.getLogger(__name__)

BVID_RE = re.compile(r"/video/(BV[a-zA-Z0-9]+)")

# Bangumi, film, live and user-space pages carry no BV id we can summarize.
EXCLUDED_MARKERS = (
    "/ss/",
    "/md/",
    "/bangumi/",
    "live.bilibili.com",
    "space.bilibili.com",
)


def normalize_url(url: str) -> str:
    """Strip the query string and fragment from ``url``. Never raises."""

    try:
        parts = urlsplit(url)
    except ValueError:
        parts = None
    if parts is not None and parts.scheme and parts.netloc:
        return f"{parts.scheme}://{parts.netloc}{parts.path}"
    return url.split("?", 1)[0].split("#", 1)[0]


def extract_bvid(url: str) -> Optional[str]:
    match = BVID_RE.search(url)
    return match.group(1) if match else None


def is_excluded(url: str) -> bool:
    return any(marker in url for marker in EXCLUDED_MARKERS)


class IdentifierResolver:
    """Turns a Bilibili link into a BV id, following at most one redirect."""

    def __init__(self, http: HttpPort) -> None:
        self._http = http

    async def resolve(self, url: str) -> Optional[str]:
        direct = extract_bvid(url)
        if direct:
            LOGGER.info("BV id taken directly from link: %s", direct)
            return direct

        LOGGER.info("Resolving %s", url)
        try:
            location = await self._http.probe_redirect(url)
        except UpstreamError as exc:
            LOGGER.error("Failed to resolve %s: %s", url, exc)
            return None

        final_url = location or url
        if final_url.startswith("//"):
            final_url = "https:" + final_url
        LOGGER.info("Resolved target: %s", final_url)

        if is_excluded(final_url):
            LOGGER.info("Skipping unsupported content (bangumi/film/live/space): %s", final_url)
            return None

        bvid = extract_bvid(final_url)
        if not bvid:
            LOGGER.warning("No BV id found in resolved URL: %s", final_url)
            return None
        LOGGER.info("BV id resolved: %s", bvid)
        return bvid
