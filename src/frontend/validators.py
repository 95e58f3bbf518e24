"""Validation helpers for config editing."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass
class FieldCheck:
    normalized: str | None
    error: str | None = None


def parse_group_id(raw_value: str) -> FieldCheck:
    value = raw_value.strip()
    if not value:
        return FieldCheck(None, "group id is required")
    if not value.isdigit():
        return FieldCheck(None, "group id must be numeric")
    return FieldCheck(str(int(value)))


def parse_owner_id(raw_value: str) -> FieldCheck:
    """Owner may be blank (anyone can run admin commands) or a QQ number."""

    value = raw_value.strip()
    if not value:
        return FieldCheck("")
    if not value.isdigit():
        return FieldCheck(None, "owner must be a numeric QQ id")
    return FieldCheck(str(int(value)))


def parse_gateway_url(raw_value: str) -> FieldCheck:
    value = raw_value.strip()
    if not value:
        return FieldCheck(None, "gateway url is required")
    try:
        parts = urlsplit(value)
    except ValueError:
        return FieldCheck(None, "gateway url is invalid")
    if parts.scheme not in {"ws", "wss"}:
        return FieldCheck(None, "gateway url must start with ws:// or wss://")
    if not parts.netloc:
        return FieldCheck(None, "gateway url needs a host")
    return FieldCheck(value)


def parse_command_prefix(raw_value: str) -> FieldCheck:
    value = raw_value.strip()
    if not value:
        return FieldCheck(None, "command prefix is required")
    if any(ch.isspace() for ch in value):
        return FieldCheck(None, "command prefix cannot contain spaces")
    return FieldCheck(value)
