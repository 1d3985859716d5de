"""Tests for the rich and JSON reporters."""

from __future__ import annotations

import io
import json

from rich.console import Console

from envsetter.core.reconcile import reconcile
from envsetter.core.session import COMMANDS
from envsetter.reporters import JsonReporter, RichReporter, ScanReport
from envsetter.reporters.rich_reporter import COMMAND_HELP


def _reporter() -> tuple[RichReporter, io.StringIO]:
    buffer = io.StringIO()
    return RichReporter(Console(file=buffer, width=100, color_system=None)), buffer


def test_command_panel_lists_every_session_command() -> None:
    listed = {name for name, _ in COMMAND_HELP}
    assert {"skip", "back", "clear", "paste", "skipall", "exit"} <= listed
    assert set(COMMANDS) - {"quit"} <= listed

    reporter, buffer = _reporter()
    reporter.show_command_panel()

    assert "paste" in buffer.getvalue()
    assert "Bulk paste env content and finish" in buffer.getvalue()


def test_json_reporter_never_emits_values() -> None:
    found = {"API_KEY": {"app.py"}}
    existing = {"API_KEY": "super-secret-value"}
    output = io.StringIO()

    JsonReporter(output).report([
        ScanReport(folder=".", target=".env", deep=True, found=found,
                   existing=existing, stats=reconcile(found, existing)),
    ])

    assert "super-secret-value" not in output.getvalue()
    assert json.loads(output.getvalue())["folders"][0]["variables"] == [
        {"name": "API_KEY", "set": True, "files": ["app.py"]},
    ]
