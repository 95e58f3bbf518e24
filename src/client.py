"""Gateway client factory for bilirelay.

The connection's lifecycle is managed explicitly by ``app`` (run_forever /
stop) so it is obvious when the socket is opened and when it ends.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from adapters.onebot_connection import OneBotConnection
from core.config import RelayConfig


def build_connection(config: RelayConfig) -> OneBotConnection:
    """Create the gateway connection from config and environment.

    NAPCAT_ACCESS_TOKEN, read via python-dotenv, takes precedence over the
    token stored in config.json so it can stay out of the file.
    """

    load_dotenv()

    access_token = os.getenv("NAPCAT_ACCESS_TOKEN") or config.upstream.access_token
    if not config.upstream.url:
        raise RuntimeError("napcat.url is required in config.json")

    logging.getLogger(__name__).info("Initializing gateway client for %s", config.upstream.url)

    return OneBotConnection(config.upstream.url, access_token)
