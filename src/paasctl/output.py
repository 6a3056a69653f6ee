"""Output system with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** -- command results only (``Team "x" successfully created!``,
  member lists, API keys). This is what scripts capture.
* **stderr** -- prompts and diagnostics (notices, warnings, errors). Debug
  output goes through :mod:`paasctl.log` instead.
* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb``, and the
  ``--no-color`` CLI flag.

The module exposes two layers:

1. :class:`OutputManager` -- a stateful object holding Rich consoles and
   the quiet flag. Created once in :func:`~paasctl.app.main_callback`
   and installed via :func:`set_output`.
2. Module-level convenience functions (:func:`info`, :func:`error`,
   :func:`warning`, etc.) that delegate to the global ``OutputManager``
   instance so callers do not need to pass the manager around.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape


class OutputManager:
    """Central manager for all CLI output with stdout/stderr discipline.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential informational messages on stderr.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet

        # Console for stderr (diagnostics)
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
            highlight=False,
        )

    @property
    def no_color(self) -> bool:
        """Whether colour output is disabled."""
        return self._no_color

    @property
    def is_quiet(self) -> bool:
        """Whether quiet mode is enabled."""
        return self._quiet

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Print a result line to stdout.

        Args:
            text: The string to write. A trailing newline is appended.
        """
        print(text, file=sys.stdout, flush=True)

    # ------------------------------------------------------------------ #
    # Interaction and diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def prompt(self, message: str) -> None:
        """Write a prompt to stderr without a trailing newline.

        Never suppressed: the user has to know input is expected.

        Args:
            message: The prompt text, e.g. ``"Password: "``.
        """
        sys.stderr.write(message)
        sys.stderr.flush()

    def info(self, message: str) -> None:
        """Print an informational message to stderr. Suppressed by ``--quiet``.

        Args:
            message: The message text.
        """
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(escape(message))

    def success(self, message: str) -> None:
        """Print a green success message to stderr. Suppressed by ``--quiet``.

        Args:
            message: The message text.
        """
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[green]{escape(message)}[/green]")

    def warning(self, message: str) -> None:
        """Print a yellow warning to stderr. NOT suppressed by ``--quiet``.

        Args:
            message: The warning text.
        """
        if self._no_color:
            print(f"Warning: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Print a bold-red error to stderr. Never suppressed.

        Args:
            message: The error text.
        """
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}")

# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager` instance.

    If no instance has been installed via :func:`set_output`, a default
    ``OutputManager`` is created lazily.
    """
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Convenience functions that use the global instance
# ------------------------------------------------------------------ #


def print_data(text: str) -> None:
    """Print a result line to stdout via the global OutputManager."""
    get_output().print_data(text)


def prompt(message: str) -> None:
    """Write a prompt to stderr via the global OutputManager."""
    get_output().prompt(message)


def info(message: str) -> None:
    """Print info message to stderr via the global OutputManager."""
    get_output().info(message)


def error(message: str) -> None:
    """Print error to stderr via the global OutputManager."""
    get_output().error(message)


def success(message: str) -> None:
    """Print success message to stderr via the global OutputManager."""
    get_output().success(message)


def warning(message: str) -> None:
    """Print warning to stderr via the global OutputManager."""
    get_output().warning(message)

