"""Tests for the output system.

Covers:
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- Global instance management
"""

from __future__ import annotations

import pytest

from paasctl import output as output_module
from paasctl.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


# ------------------------------------------------------------------ #
# Color disabling
# ------------------------------------------------------------------ #


class TestColorDisabling:
    def test_no_color_env_disables_color(self, monkeypatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch) -> None:
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch) -> None:
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False

    def test_no_color_flag(self, monkeypatch) -> None:
        monkeypatch.setenv("TERM", "xterm")
        assert OutputManager(no_color=True).no_color is True
        assert OutputManager().no_color is False


# ------------------------------------------------------------------ #
# stdout / stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    def test_print_data_goes_to_stdout(self, capsys) -> None:
        OutputManager(no_color=True).print_data('Team "core" successfully created!')
        captured = capsys.readouterr()
        assert captured.out == 'Team "core" successfully created!\n'
        assert captured.err == ""

    def test_prompt_goes_to_stderr_without_newline(self, capsys) -> None:
        OutputManager(no_color=True).prompt("Password: ")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Password: "

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("info", "hello\n"),
            ("success", "hello\n"),
            ("warning", "Warning: hello\n"),
            ("error", "Error: hello\n"),
        ],
    )
    def test_diagnostics_go_to_stderr(self, capsys, method: str, expected: str) -> None:
        getattr(OutputManager(no_color=True), method)("hello")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == expected

    def test_rich_error_has_prefix(self, capsys, monkeypatch) -> None:
        monkeypatch.setenv("TERM", "xterm")
        OutputManager().error("boom")
        assert "Error: boom" in capsys.readouterr().err

    def test_rich_keeps_brackets_literal(self, capsys, monkeypatch) -> None:
        monkeypatch.setenv("TERM", "xterm")
        OutputManager().warning("invalid field [name]")
        assert "Warning: invalid field [name]" in capsys.readouterr().err


# ------------------------------------------------------------------ #
# Quiet mode
# ------------------------------------------------------------------ #


class TestQuietMode:
    @pytest.mark.parametrize("method", ["info", "success"])
    def test_quiet_suppresses(self, capsys, method: str) -> None:
        getattr(OutputManager(no_color=True, quiet=True), method)("hidden")
        assert capsys.readouterr().err == ""

    @pytest.mark.parametrize("method", ["warning", "error", "prompt"])
    def test_quiet_does_not_suppress(self, capsys, method: str) -> None:
        getattr(OutputManager(no_color=True, quiet=True), method)("shown")
        assert "shown" in capsys.readouterr().err

    def test_quiet_does_not_suppress_stdout_data(self, capsys) -> None:
        OutputManager(no_color=True, quiet=True).print_data("API key: abc")
        assert capsys.readouterr().out == "API key: abc\n"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self) -> None:
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_output(self) -> None:
        manager = OutputManager(quiet=True)
        set_output(manager)
        assert get_output() is manager
        assert get_output().is_quiet is True

    def test_reset_output(self) -> None:
        manager = OutputManager()
        set_output(manager)
        reset_output()
        assert get_output() is not manager

    def test_convenience_functions(self, capsys) -> None:
        set_output(OutputManager(no_color=True))
        output_module.print_data("out")
        output_module.prompt("ask: ")
        output_module.error("bad")
        captured = capsys.readouterr()
        assert captured.out == "out\n"
        assert captured.err == "ask: Error: bad\n"
