"""Static configuration for bilirelay.

User-editable settings (gateway, switches, allow-list, owner, logging) live
in a single JSON file handled by the config store; this module only holds
paths and fixed protocol constants.
"""

import os

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# The config file can be relocated with BILIRELAY_CONFIG, e.g. for containers.
CONFIG_PATH = os.getenv("BILIRELAY_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")

# Every Bilibili request uses the same fixed timeout, in seconds.
HTTP_TIMEOUT = 5.0

# Fixed delay between a lost connection and the next connect attempt.
RECONNECT_DELAY = 5.0

# Outbound sends wait a uniform random delay in this range, in seconds.
SEND_JITTER = (0.5, 1.0)

API_BASE = "https://api.bilibili.com/x/web-interface"

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36 Edg/131.0.0.0"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "zh-CN,zh;q=0.9",
    "Referer": "https://www.bilibili.com/",
}

GATEWAY_USER_AGENT = "BilibiliBot/1.0"
