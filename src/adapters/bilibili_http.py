"""Bilibili HTTP adapter.

Implements the core HttpPort with a shared aiohttp session. All failures are
surfaced as UpstreamError so the core can degrade to "no reply".
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import aiohttp

import settings
from core.errors import UpstreamError

LOGGER = logging.getLogger(__name__)


class BilibiliHttpClient:
    """aiohttp-backed client for redirect probing and the view API."""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = settings.HTTP_TIMEOUT,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers = dict(headers or settings.BROWSER_HEADERS)

    async def __aenter__(self) -> "BilibiliHttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def probe_redirect(self, url: str) -> Optional[str]:
        """GET ``url`` without following redirects and return its Location."""

        session = self._get_session()
        try:
            async with session.get(
                url,
                headers=self._headers,
                allow_redirects=False,
                timeout=self._timeout,
            ) as response:
                if not 200 <= response.status < 400:
                    raise UpstreamError(f"unexpected status {response.status} for {url}")
                return response.headers.get("Location")
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise UpstreamError(f"{type(exc).__name__}: {exc}") from exc

    async def get_json(self, url: str, params: dict[str, str]) -> Any:
        session = self._get_session()
        try:
            async with session.get(
                url,
                params=params,
                headers=self._headers,
                timeout=self._timeout,
            ) as response:
                if not 200 <= response.status < 300:
                    raise UpstreamError(f"unexpected status {response.status} for {url}")
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise UpstreamError(f"{type(exc).__name__}: {exc}") from exc
