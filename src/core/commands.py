"""Operator command handling (core domain).

Commands arrive as ``<prefix> <command> [args...]`` in private chats. Admin
commands are limited to the configured owner, and every mutation is written
to the config store before the reply is returned.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Sequence

from core.config import RelayConfig
from core.models import normalize_id
from core.ports import ConfigStorePort

LOGGER = logging.getLogger(__name__)

ADMIN_COMMANDS = frozenset(
    {"enable", "disable", "enable_private", "disable_private", "add_group", "remove_group"}
)

GROUP_REFUSAL = "❌ 该命令只能在私聊中使用"
PERMISSION_DENIED = "❌ 你没有权限执行此命令"
MISSING_GROUP_ID = "⚠️ 请提供群号"
UNKNOWN_COMMAND = "⚠️ 未知的命令"


class CommandResult(NamedTuple):
    reply: Optional[str]
    should_reply: bool


def parse_command(raw_message: str, prefix: str) -> tuple[str, list[str]]:
    """Split a prefixed message into (command, args)."""

    parts = raw_message[len(prefix):].split()
    if not parts:
        return "", []
    return parts[0], parts[1:]


class CommandProcessor:
    """Applies operator commands to the shared RelayConfig."""

    def __init__(self, config: RelayConfig, store: ConfigStorePort) -> None:
        self._config = config
        self._store = store

    def help_text(self) -> str:
        prefix = self._config.command_prefix
        return "\n".join(
            [
                "📜 BilibiliBot 命令列表:",
                f"{prefix} enable - 启用全局解析",
                f"{prefix} disable - 禁用全局解析",
                f"{prefix} enable_private - 启用私聊解析",
                f"{prefix} disable_private - 禁用私聊解析",
                f"{prefix} add_group <群号> - 添加群到白名单",
                f"{prefix} remove_group <群号> - 移出白名单",
                f"{prefix} help - 显示此帮助",
            ]
        )

    def handle(
        self,
        command: str,
        args: Sequence[str],
        sender_id: object,
        is_group: bool,
    ) -> CommandResult:
        if is_group:
            return CommandResult(GROUP_REFUSAL, True)

        if command in ADMIN_COMMANDS and not self._config.is_owner(sender_id):
            LOGGER.warning("Refused admin command %r from %s", command, normalize_id(sender_id))
            return CommandResult(PERMISSION_DENIED, True)

        if command == "help":
            return CommandResult(self.help_text(), True)
        if command == "enable":
            self.set_enabled(True)
            return CommandResult("✅ 已启用视频解析服务", True)
        if command == "disable":
            self.set_enabled(False)
            return CommandResult("✅ 已禁用视频解析服务", True)
        if command == "enable_private":
            self.set_private_enabled(True)
            return CommandResult("✅ 已启用私聊消息解析", True)
        if command == "disable_private":
            self.set_private_enabled(False)
            return CommandResult("✅ 已禁用私聊消息解析", True)
        if command == "add_group":
            if not args:
                return CommandResult(MISSING_GROUP_ID, True)
            group_id = normalize_id(args[0])
            self.add_group(group_id)
            return CommandResult(f"✅ 已添加群 {group_id} 到解析列表", True)
        if command == "remove_group":
            if not args:
                return CommandResult(MISSING_GROUP_ID, True)
            group_id = normalize_id(args[0])
            if self.remove_group(group_id):
                return CommandResult(f"✅ 已从解析列表移除群 {group_id}", True)
            return CommandResult(f"⚠️ 群 {group_id} 不在解析列表中", True)
        return CommandResult(UNKNOWN_COMMAND, True)

    def set_enabled(self, enabled: bool) -> None:
        self._config.enabled = enabled
        self._persist()

    def set_private_enabled(self, enabled: bool) -> None:
        self._config.private_enabled = enabled
        self._persist()

    def add_group(self, group_id: str) -> bool:
        if not self._config.add_group(group_id):
            return False
        self._persist()
        return True

    def remove_group(self, group_id: str) -> bool:
        if not self._config.remove_group(group_id):
            return False
        self._persist()
        return True

    def _persist(self) -> None:
        # In-memory state stays updated even when the write fails.
        if not self._store.save(self._config):
            LOGGER.error("Config change applied in memory but not persisted")
