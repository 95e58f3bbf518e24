"""Application entry point for the bilirelay bot."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv

import settings
from adapters.bilibili_http import BilibiliHttpClient
from adapters.json_config_store import JsonConfigStore
from adapters.summary_formatting import format_summary
from client import build_connection
from core.commands import CommandProcessor
from core.config import RelayConfig
from core.metadata import MetadataFetcher
from core.models import PRIVATE, InboundEvent
from core.resolver import IdentifierResolver
from core.router import EventRouter

NAME = "BILIRELAY"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: RelayConfig) -> list[str]:
    redact_cfg = config.logging.get("redact", {})
    if not redact_cfg.get("enabled", False):
        return []
    values = [config.upstream.access_token]
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted({value for value in values if value}, key=len, reverse=True)


def _configure_logging(config: RelayConfig) -> None:
    logging_cfg = config.logging or {}
    if not logging_cfg.get("enabled", False):
        return

    load_dotenv()
    level_name = str(logging_cfg.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if logging_cfg.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = logging_cfg.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/bilirelay.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)
    # Frame-level websockets debug output is too noisy even at DEBUG.
    logging.getLogger("websockets").setLevel(max(level, logging.INFO))


async def _serve(config: RelayConfig, store: JsonConfigStore) -> None:
    logger = logging.getLogger(__name__)
    connection = build_connection(config)

    async with BilibiliHttpClient() as http:
        router = EventRouter(
            config=config,
            commands=CommandProcessor(config, store),
            resolver=IdentifierResolver(http),
            fetcher=MetadataFetcher(http, settings.API_BASE),
            formatter=format_summary,
            sender=connection,
        )
        logger.info(
            "Relay %s, private chats %s, %s allow-listed group(s)",
            "enabled" if config.enabled else "disabled",
            "enabled" if config.private_enabled else "disabled",
            len(config.enabled_groups),
        )
        try:
            await connection.run_forever(router.handle)
        finally:
            await connection.stop()


def _run() -> None:
    _print_banner()
    store = JsonConfigStore(settings.CONFIG_PATH)
    # Logging settings live in the config file, so records emitted while
    # loading it predate any handler. The outcome is repeated below.
    config = store.load()
    _configure_logging(config)
    logger = logging.getLogger(__name__)

    logger.info("Starting bilirelay with config %s (%s)", store.path, store.load_outcome)
    if store.load_outcome == "defaults":
        logger.warning("Config file %s could not be read, running on defaults", store.path)
    try:
        asyncio.run(_serve(config, store))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


class _NullSender:
    async def send(self, message) -> bool:
        return False


async def _check_text(text: str) -> Optional[str]:
    store = JsonConfigStore(settings.CONFIG_PATH)
    config = store.load()
    async with BilibiliHttpClient() as http:
        router = EventRouter(
            config=config,
            commands=CommandProcessor(config, store),
            resolver=IdentifierResolver(http),
            fetcher=MetadataFetcher(http, settings.API_BASE),
            formatter=format_summary,
            sender=_NullSender(),
        )
        event = InboundEvent(
            post_type="message",
            raw_message=text,
            user_id=0,
            group_id=None,
            message_type=PRIVATE,
        )
        return await router.summarize(event)


def _check(text: str) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    summary = asyncio.run(_check_text(text))
    if summary is None:
        print("No Bilibili video summary could be produced for this text.")
        return
    print(summary)


def _setup() -> None:
    _print_banner()
    from frontend.app import ConfigPanelApp

    ConfigPanelApp().run()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="bilirelay")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Connect to the gateway and start relaying")
    subparsers.add_parser("config", help="Launch the config TUI")
    check_parser = subparsers.add_parser(
        "check",
        help="Resolve a link or message text once and print the summary.",
    )
    check_parser.add_argument("text", help="Message text containing a Bilibili link")

    args = parser.parse_args(argv)
    if args.command == "config":
        _setup()
        return
    if args.command == "check":
        _check(args.text)
        return
    _run()


if __name__ == "__main__":
    main()
