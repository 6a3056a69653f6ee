"""Shared test fixtures for paasctl.

Provides reusable fixtures for isolating config and data directories,
managing output state, scripting terminal input, faking the control-plane
API with :class:`httpx.MockTransport`, and running CLI commands. These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import httpx
import pytest

from paasctl.auth.session_store import SessionStore
from paasctl.output import reset_output

TARGET = "https://paas.example.com"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> Iterator[None]:
    """Reset the global OutputManager after every test.

    The OutputManager's Rich console keeps a reference to the stderr stream
    it was created with. When Typer's CliRunner redirects the streams and
    the test finishes, that reference becomes stale. Resetting forces a
    fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch the real session or config, and clears the
    PAASCTL_* environment variables.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("paasctl.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ("PAASCTL_TARGET", "PAASCTL_TOKEN", "NO_COLOR"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def session_store(tmp_path: Path) -> SessionStore:
    """A session store writing under tmp_path."""
    return SessionStore(tmp_path / "session.json")


# ---------------------------------------------------------------------------
# Terminal fixture
# ---------------------------------------------------------------------------


class ScriptedTerminal:
    """Terminal stand-in that replays canned lines.

    Records how often echo was switched off and whether it is currently
    off, so tests can assert it is restored on every path.
    """

    def __init__(self, lines: list[str], interactive: bool = True) -> None:
        self._lines = list(lines)
        self._interactive = interactive
        self.echo_off = False
        self.echo_toggles = 0

    def is_interactive(self) -> bool:
        return self._interactive

    def read_line(self) -> str:
        if not self._lines:
            return ""
        line = self._lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line

    @contextmanager
    def echo_disabled(self) -> Iterator[None]:
        self.echo_off = True
        self.echo_toggles += 1
        try:
            yield
        finally:
            self.echo_off = False


@pytest.fixture
def make_terminal() -> Callable[..., ScriptedTerminal]:
    return ScriptedTerminal


# ---------------------------------------------------------------------------
# Fake control-plane API
# ---------------------------------------------------------------------------


class FakeAPI:
    """Route table for :class:`httpx.MockTransport`.

    Register replies with :meth:`add`; every request is recorded in
    :attr:`requests`. Unregistered routes answer 404, except the scheme
    discovery endpoint, which answers with the native scheme.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
    ) -> None:
        def reply(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status, text=text)
            if json_body is not None:
                return httpx.Response(status, json=json_body)
            return httpx.Response(status)

        self.routes[(method.upper(), path)] = reply

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is not None:
            return route(request)
        if request.url.path == "/auth/scheme":
            return httpx.Response(200, json={"name": "native", "data": {}})
        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def find(self, method: str, path: str) -> httpx.Request:
        for request in self.requests:
            if request.method == method and request.url.path == path:
                return request
        raise AssertionError(f"No {method} {path} request was sent")

    def sent(self, method: str, path: str) -> bool:
        return any(r.method == method and r.url.path == path for r in self.requests)

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def api() -> FakeAPI:
    return FakeAPI()


# ---------------------------------------------------------------------------
# CLI runner fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def invoke(cli_runner, api: FakeAPI, session_store: SessionStore):
    """Run ``paasctl`` against the fake API.

    Extra keyword arguments are merged into ``ctx.obj``; ``input`` is fed
    to stdin.
    """
    from paasctl.app import app

    def _invoke(args: list[str], input: Optional[str] = None, **obj: Any):
        state: dict[str, Any] = {
            "transport": api.transport,
            "session_store": session_store,
        }
        state.update(obj)
        return cli_runner.invoke(app, ["--target", TARGET, *args], input=input, obj=state)

    return _invoke
