"""Shared plumbing for paasctl commands.

Every command reads its collaborators from the Typer context object that
:func:`~paasctl.app.main_callback` fills in. Tests pre-seed the same
dictionary (``runner.invoke(app, args, obj={...})``) to swap in a mock
HTTP transport, a temporary session store or a scripted terminal.

Recognised ``ctx.obj`` keys:

``target``
    Value of ``--target``.
``force``
    Skip confirmations.
``transport``
    :class:`httpx.BaseTransport` handed to every :class:`SyncClient`.
``session_store`` / ``terminal`` / ``login_manager``
    Replacements for the defaults.
``scheme_resolver``
    Created on first use and shared by help rendering and execution.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import quote

import typer

from paasctl.auth.manager import LoginManager, create_default_manager
from paasctl.auth.scheme import SchemeResolver
from paasctl.auth.session_store import SessionStore
from paasctl.auth.terminal import StreamTerminal, TerminalInput
from paasctl.client.sync_client import SyncClient
from paasctl.config import load_global_config, resolve_target
from paasctl.exceptions import PaasctlError
from paasctl.output import error

F = TypeVar("F", bound=Callable[..., Any])


def exits_on_error(func: F) -> F:
    """Turn a :class:`~paasctl.exceptions.PaasctlError` into ``Error: ...`` and its exit code."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except PaasctlError as exc:
            error(str(exc))
            raise typer.Exit(code=exc.exit_code) from None

    return wrapper  # type: ignore[return-value]


def get_state(ctx: typer.Context) -> dict[str, Any]:
    """Return the shared state dictionary for this invocation."""
    root = ctx.find_root()
    if root.obj is None:
        root.obj = {}
    return root.obj


def get_session_store(ctx: typer.Context) -> SessionStore:
    state = get_state(ctx)
    store = state.get("session_store")
    if store is None:
        store = state["session_store"] = SessionStore()
    return store


def get_terminal(ctx: typer.Context) -> TerminalInput:
    return get_state(ctx).get("terminal") or StreamTerminal()


def open_client(ctx: typer.Context, authenticated: bool = True) -> SyncClient:
    """Build a :class:`SyncClient` for the resolved target.

    Raises:
        ConfigError: If no target is configured.
    """
    state = get_state(ctx)
    config = load_global_config()
    target = resolve_target(state.get("target"), config)
    return SyncClient(
        target,
        session_store=get_session_store(ctx),
        authenticated=authenticated,
        request_config=config.request,
        transport=state.get("transport"),
    )


def get_scheme_resolver(ctx: typer.Context) -> SchemeResolver:
    """Return the invocation's :class:`SchemeResolver`, creating it once."""
    state = get_state(ctx)
    resolver = state.get("scheme_resolver")
    if resolver is None:
        resolver = SchemeResolver(lambda: open_client(ctx, authenticated=False))
        state["scheme_resolver"] = resolver
    return resolver


def get_login_manager(ctx: typer.Context) -> LoginManager:
    state = get_state(ctx)
    manager = state.get("login_manager")
    if manager is None:
        manager = state["login_manager"] = create_default_manager(get_session_store(ctx))
    return manager


def confirm(ctx: typer.Context, question: str) -> bool:
    """Ask a yes/no question on stderr unless ``--force`` was given."""
    if get_state(ctx).get("force"):
        return True
    return typer.confirm(question, default=False, err=True)


def path_segment(value: Optional[str]) -> str:
    """Quote a user-supplied value for use as one URL path segment."""
    return quote(value or "", safe="@")
