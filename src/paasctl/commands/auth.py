"""Session commands -- ``login`` and ``logout``.

``login`` adapts to the server: its expected arguments depend on the
authentication scheme announced at ``GET /auth/scheme``. With the native
scheme it takes an email and asks for a password; with the OAuth scheme it
takes nothing and completes in the browser. The scheme is looked up once
per invocation and reused by the help screen and the command body.

Typical workflow::

    paasctl login me@example.com   # native scheme
    paasctl login                  # oauth scheme
    paasctl logout
"""

from __future__ import annotations

from typing import Any, Optional

import typer
from typer.core import TyperCommand

from paasctl.auth.base import LoginUsage
from paasctl.commands.common import (
    exits_on_error,
    get_login_manager,
    get_scheme_resolver,
    get_session_store,
    get_terminal,
    open_client,
)
from paasctl.exceptions import NotLoggedInError, PaasctlError
from paasctl.output import print_data, warning


def _describe_login(ctx: typer.Context) -> LoginUsage:
    """Ask the server which flow applies, defaulting to the native one."""
    scheme = get_scheme_resolver(ctx).resolve()
    try:
        return get_login_manager(ctx).flow_for(scheme).describe()
    except PaasctlError:
        from paasctl.plugins.native_login import NativeLoginFlow

        return NativeLoginFlow().describe()


class LoginCommand(TyperCommand):
    """Click command whose usage line follows the server's auth scheme."""

    def collect_usage_pieces(self, ctx: Any) -> list[str]:
        pieces = [self.options_metavar] if self.options_metavar else []
        pieces.extend(f"<{name}>" for name in _describe_login(ctx).arguments)
        return pieces

    def get_help(self, ctx: Any) -> str:
        self.help = _describe_login(ctx).description
        return super().get_help(ctx)


@exits_on_error
def login_command(
    ctx: typer.Context,
    email: Optional[str] = typer.Argument(
        None, help="Your email (password login only).", show_default=False
    ),
) -> None:
    """Log in with your credentials.

    The session token returned by the server is stored in the data
    directory and sent with every later request.

    Example::

        paasctl login me@example.com
    """
    scheme = get_scheme_resolver(ctx).resolve()
    manager = get_login_manager(ctx)
    flow = manager.flow_for(scheme)

    if email and not flow.describe().arity:
        warning(f"Ignoring argument '{email}': this server logs in through the browser.")
        email = None
    flow.check_arguments(email)

    with open_client(ctx, authenticated=False) as client:
        manager.login(client, scheme, email, terminal=get_terminal(ctx))
    print_data("Successfully logged in!")


@exits_on_error
def logout_command(ctx: typer.Context) -> None:
    """Clear local authentication credentials.

    The server is asked to revoke the stored session token first. If that
    fails the local session is cleared anyway and a warning is shown. A
    token supplied through ``PAASCTL_TOKEN`` is managed outside paasctl and
    is never revoked here.
    """
    store = get_session_store(ctx)

    entry = store.load()
    if entry is not None:
        try:
            with open_client(ctx, authenticated=False) as client:
                client.delete(
                    "/users/tokens", headers={"Authorization": f"bearer {entry.token}"}
                )
        except PaasctlError as exc:
            warning(f"Could not revoke the session on the server: {exc}")

    try:
        store.clear()
    except NotLoggedInError as exc:
        print_data(str(exc))
        return
    print_data("Successfully logged out!")
