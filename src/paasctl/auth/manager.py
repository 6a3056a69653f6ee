"""Login manager -- registry and dispatcher for login flows.

The :class:`LoginManager` maps each :class:`~paasctl.models.SchemeKind` to
a :class:`~paasctl.auth.base.LoginFlow` and exposes :meth:`LoginManager.login`,
which runs the matching flow and persists the resulting token.

For most use cases, call :func:`create_default_manager` to get a manager
pre-loaded with the built-in native and OAuth flows.

See Also:
    :class:`~paasctl.auth.base.LoginFlow` -- the flow interface.
    :class:`~paasctl.auth.session_store.SessionStore` -- where tokens end up.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from paasctl.auth.base import LoginFlow
from paasctl.auth.session_store import SessionStore
from paasctl.exceptions import AuthError
from paasctl.models import AuthScheme, SchemeKind, SessionToken

if TYPE_CHECKING:
    from paasctl.auth.terminal import TerminalInput
    from paasctl.client.sync_client import SyncClient

logger = logging.getLogger(__name__)


class LoginManager:
    """Registry and dispatcher for login flows.

    Example::

        from paasctl.auth import LoginManager
        from paasctl.plugins.native_login import NativeLoginFlow

        manager = LoginManager(SessionStore())
        manager.register(NativeLoginFlow())
        manager.login(client, scheme, "me@example.com")
    """

    def __init__(self, session_store: Optional[SessionStore] = None) -> None:
        self._flows: dict[SchemeKind, LoginFlow] = {}
        self._session_store = session_store

    @property
    def session_store(self) -> SessionStore:
        if self._session_store is None:
            self._session_store = SessionStore()
        return self._session_store

    def register(self, flow: LoginFlow) -> None:
        """Register *flow* under its :attr:`~LoginFlow.kind`, replacing any previous one."""
        self._flows[flow.kind] = flow

    def get_flow(self, kind: SchemeKind) -> LoginFlow:
        """Return the flow registered for *kind*.

        Raises:
            AuthError: If no flow handles *kind*.
        """
        flow = self._flows.get(kind)
        if flow is None:
            available = ", ".join(sorted(k.value for k in self._flows)) or "(none)"
            raise AuthError(
                f"No login flow registered for scheme '{kind.value}'. "
                f"Available: {available}"
            )
        return flow

    def flow_for(self, scheme: AuthScheme) -> LoginFlow:
        """Return the flow matching a discovered scheme."""
        return self.get_flow(scheme.kind)

    def login(
        self,
        client: SyncClient,
        scheme: AuthScheme,
        email: Optional[str] = None,
        terminal: Optional[TerminalInput] = None,
    ) -> SessionToken:
        """Run the flow for *scheme* and store the token it returns.

        Nothing is written when the flow raises; its exception propagates
        unchanged.

        Returns:
            The persisted :class:`~paasctl.models.SessionToken`.
        """
        flow = self.flow_for(scheme)
        token = flow.authenticate(client, scheme, email, terminal)
        entry = self.session_store.persist(token, scheme=scheme.name)
        logger.debug("Logged in with the %s flow", flow.kind.value)
        return entry

    def list_kinds(self) -> list[str]:
        return sorted(k.value for k in self._flows)


def create_default_manager(session_store: Optional[SessionStore] = None) -> LoginManager:
    """Create a :class:`LoginManager` with the built-in flows registered.

    - ``native`` -- email and password.
    - ``external`` -- browser-based OAuth with a local callback.
    """
    from paasctl.plugins.native_login import NativeLoginFlow
    from paasctl.plugins.oauth_login import OAuthLoginFlow

    manager = LoginManager(session_store)
    manager.register(NativeLoginFlow())
    manager.register(OAuthLoginFlow())
    return manager
