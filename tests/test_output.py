"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- Verbose mode debug output
- Progress lines and the status spinner fallback
- print_table in all three modes
- Global instance management
- Convenience functions
"""

from __future__ import annotations

import json

import pytest

from specgen import output as output_module
from specgen.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("specgen.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("specgen.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    """Test that AUTO format resolves correctly based on environment."""

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.RICH

    def test_no_color_flag_forces_plain(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO, no_color=True)
        assert mgr.format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON)
        assert mgr.format == OutputFormat.JSON


# ------------------------------------------------------------------ #
# NO_COLOR / TERM=dumb detection
# ------------------------------------------------------------------ #


class TestColorDisabling:
    """Test that NO_COLOR and TERM=dumb are respected."""

    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_no_env_vars_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    """Test that data goes to stdout and diagnostics go to stderr."""

    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_data("hello world")
        captured = capfd.readouterr()
        assert "hello world" in captured.out
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "success", "warning", "error"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        getattr(mgr, method)("Generated 3 file(s)")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "Generated 3 file(s)" in captured.err

    def test_warning_and_error_prefixes(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.warning("tag missing")
        mgr.error("compile failed")
        err_lines = capfd.readouterr().err.splitlines()
        assert err_lines == ["Warning: tag missing", "Error: compile failed"]


# ------------------------------------------------------------------ #
# Quiet and verbose modes
# ------------------------------------------------------------------ #


class TestQuietMode:
    """Test that --quiet suppresses non-essential stderr output."""

    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("reading")
        mgr.success("done")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_warnings_and_errors(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.warning("important warning")
        mgr.error("fatal")
        captured = capfd.readouterr()
        assert "important warning" in captured.err
        assert "fatal" in captured.err

    def test_is_quiet_property(self, non_tty):
        assert OutputManager(quiet=True).is_quiet is True
        assert OutputManager().is_quiet is False


class TestVerboseMode:
    """Test that --verbose enables debug output."""

    def test_debug_hidden_by_default(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.debug("pipeline: idle -> normalizing")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
        mgr.debug("pipeline: idle -> normalizing")
        assert "[debug] pipeline: idle -> normalizing" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Progress and status
# ------------------------------------------------------------------ #


class TestProgress:
    """Test progress messages (TTY only, suppressed by quiet)."""

    def test_progress_shown_in_tty(self, capfd, tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.progress("Generating files...")
        assert "Generating files..." in capfd.readouterr().err

    def test_progress_hidden_when_not_tty(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.progress("Generating files...")
        assert capfd.readouterr().err == ""

    def test_status_falls_back_to_progress(self, capfd, tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        with mgr.status("Generating files..."):
            mgr.print_data("body ran")
        captured = capfd.readouterr()
        assert "Generating files..." in captured.err
        assert "body ran" in captured.out

    def test_status_quiet(self, capfd, tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        with mgr.status("Generating files..."):
            pass
        assert capfd.readouterr().err == ""


# ------------------------------------------------------------------ #
# Tables
# ------------------------------------------------------------------ #


class TestPrintTable:
    """Test print_table in all three output modes."""

    def test_table_json_mode(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_table(["Tag", "Operations"], [["pet", "7"], ["store", "2"]])
        parsed = json.loads(capfd.readouterr().out)
        assert parsed == [
            {"Tag": "pet", "Operations": "7"},
            {"Tag": "store", "Operations": "2"},
        ]

    def test_table_plain_mode(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_table(["Tag", "Operations"], [["pet", "7"]], title="Tags")
        lines = capfd.readouterr().out.strip().split("\n")
        assert lines == ["Tag\tOperations", "pet\t7"]

    def test_table_rich_mode(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_table(["Tag"], [["pet"]], title="Tags")
        captured = capfd.readouterr()
        assert "Tag" in captured.out
        assert "pet" in captured.out
        assert "Tags" in captured.out

    def test_table_empty_rows(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_table(["col1", "col2"], [])
        assert json.loads(capfd.readouterr().out) == []


# ------------------------------------------------------------------ #
# Global instance management
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    """Test get_output / set_output / reset_output."""

    def test_get_output_creates_default(self):
        assert isinstance(get_output(), OutputManager)

    def test_set_output_overrides(self):
        custom = OutputManager(format=OutputFormat.JSON, no_color=True)
        set_output(custom)
        assert get_output() is custom

    def test_set_then_reset_then_get(self):
        first = OutputManager(format=OutputFormat.JSON, no_color=True)
        set_output(first)
        reset_output()
        assert get_output() is not first


class TestConvenienceFunctions:
    """Test module-level convenience functions delegate to global instance."""

    def test_info_convenience(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.info("global info")
        assert "global info" in capfd.readouterr().err

    def test_print_table_convenience(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True))
        output_module.print_table(["a"], [["1"]])
        assert json.loads(capfd.readouterr().out) == [{"a": "1"}]

    def test_status_convenience(self, capfd, tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        with output_module.status("working"):
            pass
        assert "working" in capfd.readouterr().err
