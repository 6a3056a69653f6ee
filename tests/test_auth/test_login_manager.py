"""Tests for LoginManager registration, dispatch and token persistence."""

from __future__ import annotations

from typing import Optional

import httpx
import pytest

from paasctl.auth.base import LoginFlow, LoginUsage
from paasctl.auth.manager import LoginManager, create_default_manager
from paasctl.auth.session_store import SessionStore
from paasctl.client.sync_client import SyncClient
from paasctl.exceptions import AuthError, AuthenticationError
from paasctl.models import AuthScheme, SchemeKind
from paasctl.plugins.native_login import NativeLoginFlow
from paasctl.plugins.oauth_login import OAuthLoginFlow


class _StaticFlow(LoginFlow):
    def __init__(self, kind: SchemeKind, token: Optional[str] = "static-token") -> None:
        self._kind = kind
        self._token = token
        self.calls: list[Optional[str]] = []

    @property
    def kind(self) -> SchemeKind:
        return self._kind

    def describe(self) -> LoginUsage:
        return LoginUsage(usage="login")

    def authenticate(self, client, scheme, email, terminal=None) -> str:
        self.calls.append(email)
        if self._token is None:
            raise AuthenticationError("denied")
        return self._token


@pytest.fixture()
def client() -> SyncClient:
    transport = httpx.MockTransport(lambda r: httpx.Response(500))
    return SyncClient("https://paas.example.com", authenticated=False, transport=transport)


class TestLoginManager:
    def test_register_and_get(self) -> None:
        manager = LoginManager()
        flow = _StaticFlow(SchemeKind.NATIVE)
        manager.register(flow)
        assert manager.get_flow(SchemeKind.NATIVE) is flow

    def test_unknown_kind_raises(self) -> None:
        manager = LoginManager()
        manager.register(_StaticFlow(SchemeKind.NATIVE))
        with pytest.raises(AuthError, match="No login flow registered for scheme 'external'"):
            manager.get_flow(SchemeKind.EXTERNAL)

    def test_flow_for_dispatches_on_kind(self) -> None:
        manager = LoginManager()
        native = _StaticFlow(SchemeKind.NATIVE)
        external = _StaticFlow(SchemeKind.EXTERNAL)
        manager.register(native)
        manager.register(external)
        assert manager.flow_for(AuthScheme(name="oauth")) is external
        assert manager.flow_for(AuthScheme(name="native")) is native

    def test_login_persists_token(self, session_store: SessionStore, client: SyncClient) -> None:
        manager = LoginManager(session_store)
        flow = _StaticFlow(SchemeKind.EXTERNAL, token="abc")
        manager.register(flow)

        with client:
            entry = manager.login(client, AuthScheme(name="oauth"), None)

        assert entry.token == "abc"
        assert session_store.load().token == "abc"
        assert session_store.load().scheme == "oauth"
        assert flow.calls == [None]

    def test_failed_flow_persists_nothing(self, session_store: SessionStore, client: SyncClient) -> None:
        manager = LoginManager(session_store)
        manager.register(_StaticFlow(SchemeKind.NATIVE, token=None))

        with client:
            with pytest.raises(AuthenticationError, match="denied"):
                manager.login(client, AuthScheme.default(), "a@b.com")
        assert not session_store.exists()

    def test_failed_flow_keeps_previous_session(
        self, session_store: SessionStore, client: SyncClient
    ) -> None:
        session_store.persist("previous")
        manager = LoginManager(session_store)
        manager.register(_StaticFlow(SchemeKind.NATIVE, token=None))

        with client:
            with pytest.raises(AuthenticationError):
                manager.login(client, AuthScheme.default(), "a@b.com")
        assert session_store.load().token == "previous"


class TestDefaultManager:
    def test_builtin_flows(self) -> None:
        manager = create_default_manager()
        assert manager.list_kinds() == ["external", "native"]
        assert isinstance(manager.get_flow(SchemeKind.NATIVE), NativeLoginFlow)
        assert isinstance(manager.get_flow(SchemeKind.EXTERNAL), OAuthLoginFlow)

    def test_uses_given_store(self, session_store: SessionStore) -> None:
        assert create_default_manager(session_store).session_store is session_store
