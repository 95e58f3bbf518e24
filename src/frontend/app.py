"""Main Textual app for the bilirelay config panel."""

from __future__ import annotations

import json
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, ContentSwitcher, Footer, Static, Tab, Tabs

from adapters.json_config_store import JsonConfigStore
from core.config import RelayConfig

from .constants import BILIBILI_PINK, CONFIG_PATH
from .modals import UnsavedChangesScreen
from .state import ConfigState
from .tabs.general import GeneralTab
from .tabs.groups import GroupsTab


class ConfigPanelApp(App):
    """Config panel editing config.json in place."""

    BINDINGS = [
        ("ctrl+s", "save_config", "Save"),
        ("ctrl+r", "reload_config", "Reload"),
        ("q", "request_quit", "Quit"),
        ("ctrl+c", "request_quit", "Quit"),
    ]

    CSS = """
    Screen {
        background: #17181c;
        color: #e8eef5;
    }

    #header {
        height: 5;
        padding: 1 2;
        border-bottom: solid #33353d;
    }

    #header-left, #header-right {
        width: 1fr;
    }

    #header-right {
        content-align: right top;
    }

    .subtle {
        color: #8a8f98;
    }

    .form-label {
        margin-top: 1;
        color: #8a8f98;
    }

    .form-error, .modal-error, .status-error {
        color: #ff6b6b;
    }

    .status-modified {
        color: #f5c451;
    }

    .status-loaded {
        color: #6bd490;
    }

    #content {
        padding: 1 2;
    }

    #groups-table {
        height: 1fr;
    }

    #groups-actions, .modal-actions {
        height: 3;
    }

    .modal-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: round #FB7299;
        background: #202227;
    }

    ModalScreen {
        align: center middle;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.config_state = ConfigState()
        self._store = JsonConfigStore(str(CONFIG_PATH))

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal():
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static(f"file: {CONFIG_PATH.name}", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static("", id="header-status")
                    yield Horizontal(
                        Button("Save", id="save-btn"),
                        Button("Reload", id="reload-btn"),
                    )

        yield Tabs(
            Tab("General", id="general"),
            Tab("Groups", id="groups"),
            id="tabs",
        )
        with ContentSwitcher(id="content", initial="general"):
            yield GeneralTab(id="general")
            yield GroupsTab(id="groups")
        yield Footer()

    def on_mount(self) -> None:
        self._load_config()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        if event.tab.id:
            self.query_one("#content", ContentSwitcher).current = event.tab.id

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-btn":
            self.action_save_config()
        elif event.button.id == "reload-btn":
            self.action_reload_config()

    def action_save_config(self) -> None:
        self._save_config()

    def action_reload_config(self) -> None:
        if self.config_state.dirty:
            self.push_screen(UnsavedChangesScreen("reload"), self._handle_reload_choice)
        else:
            self._load_config()

    def action_request_quit(self) -> None:
        if self.config_state.dirty:
            self.push_screen(UnsavedChangesScreen("exit"), self._handle_exit_choice)
        else:
            self.exit()

    def _handle_exit_choice(self, choice: str | None) -> None:
        if choice == "save":
            if self._save_config():
                self.exit()
        elif choice == "discard":
            self.exit()

    def _handle_reload_choice(self, choice: str | None) -> None:
        if choice == "save":
            if self._save_config():
                self._load_config()
        elif choice == "discard":
            self._load_config()

    def _load_config(self) -> None:
        # Read strictly here: the store falls back to defaults on a broken
        # file, which would silently overwrite it on the next save.
        try:
            if CONFIG_PATH.exists():
                raw = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
                if not isinstance(raw, dict):
                    raise ValueError("config root must be an object")
                self.config_state.config = RelayConfig.from_dict(raw)
            else:
                self.config_state.config = self._store.load()
            self.config_state.error = None
        except json.JSONDecodeError as exc:
            self.config_state.config = None
            self.config_state.error = f"config.json error: {exc.msg}"
        except (OSError, ValueError) as exc:
            self.config_state.config = None
            self.config_state.error = str(exc)
        self.config_state.dirty = False
        self._refresh_header()
        self.query_one(GeneralTab).reload_from_config()
        self.query_one(GroupsTab).reload_from_config()

    def _save_config(self) -> bool:
        if self.config_state.config is None:
            self.config_state.error = "Nothing to save"
            self._refresh_header()
            return False
        if not self._store.save(self.config_state.config):
            self.config_state.error = "save failed, see logs"
            self._refresh_header()
            return False
        self.config_state.dirty = False
        self.config_state.error = None
        self._refresh_header()
        return True

    def mark_dirty(self) -> None:
        self.config_state.dirty = True
        self._refresh_header()

    def _refresh_header(self) -> None:
        status = self.query_one("#header-status", Static)
        status.remove_class("status-loaded", "status-modified", "status-error")
        if self.config_state.error:
            status.update(f"config: {self.config_state.error}")
            status.add_class("status-error")
        elif self.config_state.dirty:
            status.update("config: modified *")
            status.add_class("status-modified")
        else:
            status.update("config: loaded")
            status.add_class("status-loaded")

        save_btn = self.query_one("#save-btn", Button)
        save_btn.disabled = self.config_state.config is None or not self.config_state.dirty

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("BILI", BILIBILI_PINK),
            ("RELAY > Config Panel", "bold"),
        )
