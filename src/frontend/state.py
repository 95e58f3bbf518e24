"""State container for config loading and dirty tracking."""

from __future__ import annotations

from dataclasses import dataclass

from core.config import RelayConfig


@dataclass
class ConfigState:
    config: RelayConfig | None = None
    dirty: bool = False
    error: str | None = None
