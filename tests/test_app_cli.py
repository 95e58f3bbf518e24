from __future__ import annotations

import pytest

import app


def test_config_command_launches_panel(monkeypatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(app, "_setup", lambda: calls.append("config"))
    monkeypatch.setattr(app, "_run", lambda: calls.append("run"))
    app.main(["config"])
    app.main([])
    assert calls == ["config", "run"]


def test_unknown_command_is_rejected(monkeypatch) -> None:
    monkeypatch.setattr(app, "_setup", lambda: pytest.fail("panel launched"))
    with pytest.raises(SystemExit):
        app.main(["setup"])
