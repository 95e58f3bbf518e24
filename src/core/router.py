"""Core event routing pipeline.

This module is integration-agnostic. It relies on ports for HTTP, config
persistence and reply delivery. Per event the order is strict:
1) Prefixed messages go to the command processor and nowhere else
2) Relay gating (global switch, group allow-list, private switch)
3) Extract one reference, normalize when flagged
4) Resolve the BV id, fetch metadata, format, send
Any step yielding nothing ends the pipeline without a reply.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from core.commands import CommandProcessor, parse_command
from core.config import RelayConfig
from core.extractor import extract_reference
from core.metadata import MetadataFetcher
from core.models import ContentMetadata, InboundEvent, OutboundMessage
from core.ports import ReplySenderPort
from core.resolver import IdentifierResolver, normalize_url

LOGGER = logging.getLogger(__name__)


class EventRouter:
    """Routes one inbound event to the command processor or the relay pipeline."""

    def __init__(
        self,
        config: RelayConfig,
        commands: CommandProcessor,
        resolver: IdentifierResolver,
        fetcher: MetadataFetcher,
        formatter: Callable[[ContentMetadata], str],
        sender: ReplySenderPort,
    ) -> None:
        self._config = config
        self._commands = commands
        self._resolver = resolver
        self._fetcher = fetcher
        self._formatter = formatter
        self._sender = sender

    def is_command(self, event: InboundEvent) -> bool:
        prefix = self._config.command_prefix
        return bool(prefix) and event.raw_message.startswith(prefix)

    def relay_permitted(self, event: InboundEvent) -> bool:
        if not self._config.enabled:
            return False
        if event.is_group:
            return self._config.is_group_allowed(event.group_id)
        return self._config.private_enabled

    async def handle(self, event: InboundEvent) -> bool:
        """Process one event; True when a reply was handed to the transport."""

        if self.is_command(event):
            return await self._handle_command(event)

        if not self.relay_permitted(event):
            return False

        text = await self.summarize(event)
        if text is None:
            return False
        return await self._reply(event, text)

    async def summarize(self, event: InboundEvent) -> Optional[str]:
        """Run extraction through formatting; None when there is nothing to say."""

        reference = extract_reference(event)
        if reference is None:
            return None

        url = normalize_url(reference.url) if reference.needs_normalization else reference.url
        LOGGER.info("[%s] Bilibili %s detected, link: %s", event.describe(), reference.provenance, url)

        bvid = await self._resolver.resolve(url)
        if not bvid:
            return None

        metadata = await self._fetcher.fetch(bvid)
        if metadata is None:
            return None

        text = self._formatter(metadata)
        if self._config.pet_phrase:
            text += f"\n{self._config.pet_phrase}"
        return text

    async def _handle_command(self, event: InboundEvent) -> bool:
        command, args = parse_command(event.raw_message, self._config.command_prefix)
        LOGGER.info("[%s] Command %r", event.describe(), command)
        result = self._commands.handle(command, args, event.user_id, event.is_group)
        if not result.should_reply or not result.reply:
            return False
        return await self._reply(event, result.reply)

    async def _reply(self, event: InboundEvent, text: str) -> bool:
        message = OutboundMessage(is_group=event.is_group, target_id=event.target_id, text=text)
        return await self._sender.send(message)
