"""Shared constants for the Textual UI."""

from __future__ import annotations

from pathlib import Path

import settings

BILIBILI_PINK = "#FB7299"
CONFIG_PATH = Path(settings.CONFIG_PATH)
