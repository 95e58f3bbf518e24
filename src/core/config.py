"""Core configuration dataclasses.

Reading and writing the JSON file happens in an adapter; these dataclasses
define the shape the core expects and how a raw dict maps onto it.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Iterable

from core.models import normalize_id

DEFAULT_GATEWAY_URL = "ws://localhost:3000/ws"
DEFAULT_COMMAND_PREFIX = "/bilibilibot"

DEFAULT_LOGGING: dict[str, Any] = {
    "enabled": True,
    "level": "INFO",
    "console": True,
    "file": {
        "enabled": False,
        "path": "logs/bilirelay.log",
        "max_bytes": 5 * 1024 * 1024,
        "backup_count": 5,
    },
    "redact": {
        "enabled": True,
        "patterns": ["NAPCAT_ACCESS_TOKEN"],
    },
}

_KNOWN_KEYS = {
    "enabled",
    "enabledPrivateMsg",
    "napcat",
    "petPhrase",
    "enabledGroups",
    "owner",
    "commandPrefix",
    "logging",
}


@dataclass
class UpstreamConfig:
    """Gateway connection settings."""

    url: str = DEFAULT_GATEWAY_URL
    access_token: str = ""


@dataclass
class RelayConfig:
    """Process-wide relay settings, mutated only by the command processor."""

    enabled: bool = True
    private_enabled: bool = True
    upstream: UpstreamConfig = field(default_factory=UpstreamConfig)
    pet_phrase: str = ""
    enabled_groups: list[str] = field(default_factory=list)
    owner: str = ""
    command_prefix: str = DEFAULT_COMMAND_PREFIX
    logging: dict[str, Any] = field(default_factory=lambda: copy.deepcopy(DEFAULT_LOGGING))
    extras: dict[str, Any] = field(default_factory=dict)

    def is_group_allowed(self, group_id: Any) -> bool:
        return normalize_id(group_id) in self.enabled_groups

    def is_owner(self, sender_id: Any) -> bool:
        """True when no owner is configured or the sender is the owner."""

        owner = normalize_id(self.owner)
        if not owner:
            return True
        return normalize_id(sender_id) == owner

    def add_group(self, group_id: Any) -> bool:
        """Insert a group into the allow-list; False when already present."""

        key = normalize_id(group_id)
        if key in self.enabled_groups:
            return False
        self.enabled_groups.append(key)
        return True

    def remove_group(self, group_id: Any) -> bool:
        """Remove a group from the allow-list; False when it was absent."""

        key = normalize_id(group_id)
        if key not in self.enabled_groups:
            return False
        self.enabled_groups.remove(key)
        return True

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "RelayConfig":
        """Build a config from a (possibly partial) JSON object.

        Missing keys keep their defaults; nested ``napcat`` and ``logging``
        sections are merged key by key.
        """

        defaults = cls()
        napcat = raw.get("napcat") or {}
        if not isinstance(napcat, dict):
            napcat = {}
        logging_cfg = raw.get("logging") or {}
        if not isinstance(logging_cfg, dict):
            logging_cfg = {}

        return cls(
            enabled=bool(raw.get("enabled", defaults.enabled)),
            private_enabled=bool(raw.get("enabledPrivateMsg", defaults.private_enabled)),
            upstream=UpstreamConfig(
                url=str(napcat.get("url", defaults.upstream.url)),
                access_token=str(napcat.get("accessToken", defaults.upstream.access_token) or ""),
            ),
            pet_phrase=str(raw.get("petPhrase", defaults.pet_phrase) or ""),
            enabled_groups=_unique_ids(raw.get("enabledGroups") or []),
            owner=normalize_id(raw.get("owner", defaults.owner)),
            command_prefix=str(raw.get("commandPrefix", defaults.command_prefix) or ""),
            logging=_merge(defaults.logging, logging_cfg),
            extras={key: value for key, value in raw.items() if key not in _KNOWN_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "enabled": self.enabled,
            "enabledPrivateMsg": self.private_enabled,
            "napcat": {
                "url": self.upstream.url,
                "accessToken": self.upstream.access_token,
            },
            "petPhrase": self.pet_phrase,
            "enabledGroups": list(self.enabled_groups),
            "owner": self.owner,
            "commandPrefix": self.command_prefix,
            "logging": copy.deepcopy(self.logging),
        }
        data.update(copy.deepcopy(self.extras))
        return data


def _unique_ids(values: Iterable[Any]) -> list[str]:
    seen: list[str] = []
    for value in values:
        key = normalize_id(value)
        if key and key not in seen:
            seen.append(key)
    return seen


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
