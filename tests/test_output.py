"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/json based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression
- format_response in JSON and plain formats
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from restbase import output as output_module
from restbase.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("restbase.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("restbase.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_json_when_not_tty(self, non_tty):
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.JSON

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.RICH

    def test_auto_with_no_color_on_tty_is_json(self, tty):
        mgr = OutputManager(format=OutputFormat.AUTO, no_color=True)
        assert mgr.format == OutputFormat.JSON

    def test_explicit_format_kept(self, tty):
        assert OutputManager(format=OutputFormat.PLAIN).format == OutputFormat.PLAIN


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_color_enabled_by_default(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# Data output
# ------------------------------------------------------------------ #


class TestFormatResponse:
    def test_json_goes_to_stdout(self, capsys):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.format_response({"name": "Luke", "films": ["a"]})

        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"name": "Luke", "films": ["a"]}
        assert captured.err == ""

    def test_json_keeps_unicode(self, capsys):
        OutputManager(format=OutputFormat.JSON, no_color=True).format_response({"name": "Padmé"})
        assert "Padmé" in capsys.readouterr().out

    def test_plain_dict(self, capsys):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).format_response({"a": 1, "b": "x"})
        assert capsys.readouterr().out == "a\t1\nb\tx\n"

    def test_plain_list_of_dicts(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.format_response([{"id": "abc", "width": 1}, {"id": "def", "width": 2}])
        assert capsys.readouterr().out == "abc\t1\ndef\t2\n"

    def test_plain_scalar(self, capsys):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).format_response(42)
        assert capsys.readouterr().out == "42\n"


# ------------------------------------------------------------------ #
# Diagnostics
# ------------------------------------------------------------------ #


class TestDiagnostics:
    def test_info_goes_to_stderr(self, capsys):
        OutputManager(no_color=True).info("HTTP 200 OK")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "HTTP 200 OK\n"

    def test_quiet_suppresses_info_and_success(self, capsys):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden")
        assert capsys.readouterr().err == ""

    def test_quiet_keeps_warnings_and_errors(self, capsys):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.warning("careful")
        mgr.error("broken")
        assert capsys.readouterr().err == "Warning: careful\nError: broken\n"

    def test_markup_in_messages_is_escaped(self, capsys, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        OutputManager(format=OutputFormat.JSON).info("[bold]not markup[/bold]")
        assert "[bold]not markup[/bold]" in capsys.readouterr().err


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_output_used_by_helpers(self, capsys):
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True))
        output_module.format_response([1, 2])
        output_module.error("bad")

        captured = capsys.readouterr()
        assert json.loads(captured.out) == [1, 2]
        assert captured.err == "Error: bad\n"
