"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for HTTP, config persistence and reply
delivery so the core can be exercised without sockets or files.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from core.config import RelayConfig
from core.models import OutboundMessage


class HttpPort(Protocol):
    """HTTP operations required by the resolver and metadata fetcher.

    Implementations raise ``core.errors.UpstreamError`` on failure.
    """

    async def probe_redirect(self, url: str) -> Optional[str]:
        """GET ``url`` without following redirects; return the Location header."""
        ...

    async def get_json(self, url: str, params: dict[str, str]) -> Any:
        ...


class ConfigStorePort(Protocol):
    """Persistence for the relay configuration."""

    def load(self) -> RelayConfig:
        ...

    def save(self, config: RelayConfig) -> bool:
        ...


class ReplySenderPort(Protocol):
    """Best-effort delivery of a reply; False when the send was skipped."""

    async def send(self, message: OutboundMessage) -> bool:
        ...
