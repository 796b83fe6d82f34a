"""
Tests for the CLI error panel and verbose mode.

Organization
------------
- TestVerboseMode: --verbose toggle
- TestErrorRenderer: panel content for DocForgeError
"""

from __future__ import annotations

from rich.console import Console

from docforge.cli import console as console_module
from docforge.cli.console import ErrorRenderer, is_verbose_mode, set_verbose_mode
from docforge.core.exceptions import InputError


class TestVerboseMode:
    """Tests for the verbose flag."""

    def test_toggle(self) -> None:
        try:
            set_verbose_mode(True)
            assert is_verbose_mode() is True
        finally:
            set_verbose_mode(False)

        assert is_verbose_mode() is False


class TestErrorRenderer:
    """Tests for ErrorRenderer.render."""

    def test_panel_shows_code_and_fix_hints(self, monkeypatch) -> None:
        recorder = Console(record=True, width=100)
        monkeypatch.setattr(console_module, "_console", recorder)

        ErrorRenderer.render(
            InputError("Doclet file not found: x.json", how_to_fix=["Run jsdoc -X"]),
            context="While running publish",
        )
        text = recorder.export_text()

        assert "DF-IN-000" in text
        assert "Doclet file not found: x.json" in text
        assert "While running publish" in text
        assert "- Run jsdoc -X" in text
        assert "Traceback" not in text

    def test_root_cause_is_shown(self, monkeypatch) -> None:
        recorder = Console(record=True, width=100)
        monkeypatch.setattr(console_module, "_console", recorder)

        try:
            try:
                raise ValueError("bad byte")
            except ValueError as e:
                raise InputError("Could not read doclets") from e
        except InputError as err:
            ErrorRenderer.render(err, show_traceback=True)

        text = recorder.export_text()
        assert "Root cause: bad byte" in text
        assert "Traceback (--verbose mode)" in text
