"""JSON config file adapter.

Implements the core ConfigStorePort on top of a single JSON file. Saves are
synchronous and best-effort: failures are logged and reported, never raised.
"""

from __future__ import annotations

import json
import logging
import os

from core.config import RelayConfig

LOGGER = logging.getLogger(__name__)


class JsonConfigStore:
    """Load-or-create and persist the relay configuration."""

    def __init__(self, path: str) -> None:
        self._path = path
        self._load_outcome = "not loaded"

    @property
    def path(self) -> str:
        return self._path

    @property
    def load_outcome(self) -> str:
        """How the last load resolved: created, loaded or defaults."""

        return self._load_outcome

    def load(self) -> RelayConfig:
        """Return the stored config merged over defaults.

        A missing file is created with defaults. An unreadable or invalid file
        falls back to defaults without overwriting it.
        """

        if not os.path.exists(self._path):
            LOGGER.warning("Config file not found, writing defaults to %s", self._path)
            config = RelayConfig()
            self.save(config)
            self._load_outcome = "created"
            return config

        try:
            with open(self._path, "r", encoding="utf-8") as handle:
                raw = json.load(handle)
            if not isinstance(raw, dict):
                raise ValueError("config root must be an object")
        except (OSError, ValueError) as exc:
            LOGGER.error("Failed to load config %s, using defaults: %s", self._path, exc)
            self._load_outcome = "defaults"
            return RelayConfig()

        LOGGER.info("Config loaded from %s", self._path)
        self._load_outcome = "loaded"
        return RelayConfig.from_dict(raw)

    def save(self, config: RelayConfig) -> bool:
        try:
            directory = os.path.dirname(self._path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as handle:
                json.dump(config.to_dict(), handle, indent=2, ensure_ascii=False)
                handle.write("\n")
        except OSError as exc:
            LOGGER.error("Failed to save config %s: %s", self._path, exc)
            return False
        LOGGER.info("Config saved to %s", self._path)
        return True
