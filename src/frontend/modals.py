"""Modal dialogs for the Textual config panel."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from .validators import parse_group_id


class UnsavedChangesScreen(ModalScreen[str]):
    """Ask what to do with unsaved edits before quitting or reloading."""

    def __init__(self, action_label: str = "exit") -> None:
        super().__init__()
        self._action_label = action_label

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Unsaved changes", classes="modal-title"),
            Static(f"Save changes before {self._action_label}?", classes="modal-body"),
            Horizontal(
                Button("Save", id="unsaved-save", variant="success"),
                Button("Discard", id="unsaved-discard", variant="error"),
                Button("Cancel", id="unsaved-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        choices = {"unsaved-save": "save", "unsaved-discard": "discard"}
        self.dismiss(choices.get(event.button.id or "", "cancel"))


class AddGroupScreen(ModalScreen[str | None]):
    """Prompt for a QQ group id to allow-list."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Add group", classes="modal-title"),
            Static("", id="add-error", classes="modal-error"),
            Static("group id", classes="form-label"),
            Input(placeholder="123456789", id="add-group-id"),
            Horizontal(
                Button("Add", id="add-confirm", variant="success"),
                Button("Cancel", id="add-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog",
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._confirm(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-confirm":
            self._confirm(self.query_one("#add-group-id", Input).value)
        else:
            self.dismiss(None)

    def _confirm(self, raw_value: str) -> None:
        check = parse_group_id(raw_value)
        if check.error or check.normalized is None:
            self.query_one("#add-error", Static).update(check.error or "invalid group id")
            return
        self.dismiss(check.normalized)


class RemoveGroupScreen(ModalScreen[bool]):
    """Confirm removal of an allow-listed group."""

    def __init__(self, group_id: str) -> None:
        super().__init__()
        self._group_id = group_id

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Remove group?", classes="modal-title"),
            Static(self._group_id, classes="modal-body"),
            Horizontal(
                Button("Remove", id="remove-confirm", variant="error"),
                Button("Cancel", id="remove-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "remove-confirm")
