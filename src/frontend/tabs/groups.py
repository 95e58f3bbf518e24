"""Groups tab: the allow-list of QQ groups the relay answers in."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, DataTable, Static

from ..modals import AddGroupScreen, RemoveGroupScreen


class GroupsTab(Vertical):
    """Table of allow-listed groups with add/remove actions."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._selected: Optional[str] = None
        self._table_ready = False

    def compose(self):
        yield Static("Summaries are only sent in these groups.", classes="subtle")
        yield DataTable(id="groups-table", cursor_type="row")
        with Horizontal(id="groups-actions"):
            yield Button("Add", id="add-group", variant="success")
            yield Button("Remove", id="remove-group", variant="error")

    def on_mount(self) -> None:
        table = self.query_one("#groups-table", DataTable)
        table.add_column("group id", key="group_id", width=24)
        table.zebra_stripes = True
        self._table_ready = True
        self.reload_from_config()

    def reload_from_config(self) -> None:
        if not self._table_ready:
            return
        table = self.query_one("#groups-table", DataTable)
        table.clear()
        config = self.app.config_state.config
        groups = config.enabled_groups if config is not None else []
        for group_id in groups:
            table.add_row(group_id, key=group_id)
        if self._selected not in groups:
            self._selected = None
        self.query_one("#remove-group", Button).disabled = self._selected is None

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        row_key = event.row_key
        self._selected = str(row_key.value if hasattr(row_key, "value") else row_key)
        self.query_one("#remove-group", Button).disabled = False

    @on(Button.Pressed, "#add-group")
    def _on_add(self) -> None:
        self.app.push_screen(AddGroupScreen(), self._handle_add)

    @on(Button.Pressed, "#remove-group")
    def _on_remove(self) -> None:
        if self._selected is None:
            return
        self.app.push_screen(RemoveGroupScreen(self._selected), self._handle_remove)

    def _handle_add(self, group_id: str | None) -> None:
        config = self.app.config_state.config
        if not group_id or config is None:
            return
        if config.add_group(group_id):
            self.app.mark_dirty()
        self.reload_from_config()

    def _handle_remove(self, confirmed: bool | None) -> None:
        config = self.app.config_state.config
        if not confirmed or config is None or self._selected is None:
            return
        if config.remove_group(self._selected):
            self.app.mark_dirty()
        self._selected = None
        self.reload_from_config()
