"""Typer application and CLI entry point for paasctl.

This module builds the top-level Typer application and registers every
built-in command: the flat account, team and API-key commands plus the
``target`` sub-group.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`paasctl.config`: Target and global configuration resolution.
    :mod:`paasctl.output`: Output initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from paasctl import __version__
from paasctl.commands.auth import LoginCommand, login_command, logout_command
from paasctl.commands.target import target_app
from paasctl.commands.teams import (
    team_create,
    team_list,
    team_remove,
    team_user_add,
    team_user_list,
    team_user_remove,
)
from paasctl.commands.tokens import token_regenerate, token_show
from paasctl.commands.users import change_password, reset_password, user_create, user_remove
from paasctl.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="paasctl",
    help="Manage your account, teams and API keys on the platform.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

app.command("login", cls=LoginCommand)(login_command)
app.command("logout")(logout_command)
app.command("user-create")(user_create)
app.command("user-remove")(user_remove)
app.command("change-password")(change_password)
app.command("reset-password")(reset_password)
app.command("team-create")(team_create)
app.command("team-remove")(team_remove)
app.command("team-list")(team_list)
app.command("team-user-add")(team_user_add)
app.command("team-user-remove")(team_user_remove)
app.command("team-user-list")(team_user_list)
app.command("token-show")(token_show)
app.command("token-regenerate")(token_regenerate)
app.add_typer(target_app, name="target", help="Show or change the API target.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"paasctl {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    target: Optional[str] = typer.Option(
        None, "--target", help="API base URL (overrides PAASCTL_TARGET and the saved target)."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip confirmations."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~paasctl.output.OutputManager` and
    logging from CLI flags, and stores shared options in the Typer context
    so that sub-commands can read them via ``ctx.obj``. Keys already in
    ``ctx.obj`` are kept.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        target: Target override (highest precedence).
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output and logging.
        force: Skip interactive confirmations.
    """
    from paasctl.log import configure_logging
    from paasctl.output import OutputManager, set_output

    output = OutputManager(no_color=no_color, quiet=quiet)
    set_output(output)
    configure_logging(verbose=verbose, no_color=output.no_color)

    ctx.ensure_object(dict)
    ctx.obj["target"] = target
    ctx.obj["force"] = force
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    from paasctl.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``paasctl`` console script.

    Unhandled :class:`~paasctl.exceptions.PaasctlError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from paasctl.exceptions import PaasctlError
        from paasctl.output import error

        if isinstance(exc, PaasctlError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
