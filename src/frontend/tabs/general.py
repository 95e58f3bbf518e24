"""General tab: relay switches, gateway and operator settings."""

from __future__ import annotations

from typing import Any, Callable

from textual import on
from textual.containers import ScrollableContainer, Vertical
from textual.widgets import Input, Static, Switch

from core.config import RelayConfig

from ..validators import (
    FieldCheck,
    parse_command_prefix,
    parse_gateway_url,
    parse_owner_id,
)


class GeneralTab(Vertical):
    """Form for every scalar setting in config.json."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._loading_form = False

    def compose(self):
        with ScrollableContainer(id="general-form"):
            yield Static("enabled (global relay)", classes="form-label")
            yield Switch(id="general-enabled")
            yield Static("enabledPrivateMsg", classes="form-label")
            yield Switch(id="general-private")
            yield Static("napcat.url", classes="form-label")
            yield Input(placeholder="ws://localhost:3000/ws", id="general-url")
            yield Static("napcat.accessToken", classes="form-label")
            yield Input(placeholder="(empty)", password=True, id="general-token")
            yield Static("commandPrefix", classes="form-label")
            yield Input(placeholder="/bilibilibot", id="general-prefix")
            yield Static("owner", classes="form-label")
            yield Input(placeholder="QQ id, empty allows anyone", id="general-owner")
            yield Static("petPhrase", classes="form-label")
            yield Input(placeholder="(appended to every summary)", id="general-phrase")
            yield Static("", id="general-error", classes="form-error")

    def reload_from_config(self) -> None:
        config = self.app.config_state.config
        if config is None:
            return
        self._loading_form = True
        self.query_one("#general-enabled", Switch).value = config.enabled
        self.query_one("#general-private", Switch).value = config.private_enabled
        self.query_one("#general-url", Input).value = config.upstream.url
        self.query_one("#general-token", Input).value = config.upstream.access_token
        self.query_one("#general-prefix", Input).value = config.command_prefix
        self.query_one("#general-owner", Input).value = config.owner
        self.query_one("#general-phrase", Input).value = config.pet_phrase
        self._set_error("")
        self._loading_form = False

    def _edit(self, apply: Callable[[RelayConfig], None]) -> None:
        config = self.app.config_state.config
        if self._loading_form or config is None:
            return
        apply(config)
        self.app.mark_dirty()

    def _edit_checked(self, check: FieldCheck, apply: Callable[[RelayConfig, str], None]) -> None:
        if self._loading_form:
            return
        if check.error or check.normalized is None:
            self._set_error(check.error or "invalid value")
            return
        self._set_error("")
        value = check.normalized
        self._edit(lambda config: apply(config, value))

    @on(Switch.Changed, "#general-enabled")
    def _on_enabled(self, event: Switch.Changed) -> None:
        self._edit(lambda config: setattr(config, "enabled", bool(event.value)))

    @on(Switch.Changed, "#general-private")
    def _on_private(self, event: Switch.Changed) -> None:
        self._edit(lambda config: setattr(config, "private_enabled", bool(event.value)))

    @on(Input.Changed, "#general-url")
    def _on_url(self, event: Input.Changed) -> None:
        self._edit_checked(
            parse_gateway_url(event.value),
            lambda config, value: setattr(config.upstream, "url", value),
        )

    @on(Input.Changed, "#general-token")
    def _on_token(self, event: Input.Changed) -> None:
        self._edit(lambda config: setattr(config.upstream, "access_token", event.value.strip()))

    @on(Input.Changed, "#general-prefix")
    def _on_prefix(self, event: Input.Changed) -> None:
        self._edit_checked(
            parse_command_prefix(event.value),
            lambda config, value: setattr(config, "command_prefix", value),
        )

    @on(Input.Changed, "#general-owner")
    def _on_owner(self, event: Input.Changed) -> None:
        self._edit_checked(
            parse_owner_id(event.value),
            lambda config, value: setattr(config, "owner", value),
        )

    @on(Input.Changed, "#general-phrase")
    def _on_phrase(self, event: Input.Changed) -> None:
        self._edit(lambda config: setattr(config, "pet_phrase", event.value))

    def _set_error(self, message: str) -> None:
        self.query_one("#general-error", Static).update(message)
