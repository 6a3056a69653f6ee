"""Native login flow -- exchange email and password for a session token.

The flow prompts ``Password: `` on stderr, reads the password through
:func:`~paasctl.auth.terminal.read_password` (masked on a terminal) and
posts it to ``/users/{email}/tokens``. The ``token`` field of the JSON
reply is the session token.
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

from paasctl.auth.base import LoginFlow, LoginUsage
from paasctl.auth.terminal import TerminalInput, prompt_password
from paasctl.client.sync_client import SyncClient
from paasctl.exceptions import AuthenticationError, AuthError, NotFoundError, ServerError
from paasctl.models import AuthScheme, SchemeKind

logger = logging.getLogger(__name__)


def extract_token(payload: Any) -> str:
    """Return the ``token`` field of a login reply.

    Raises:
        AuthenticationError: If *payload* is not an object with a non-empty
            string ``token``.
    """
    token = payload.get("token") if isinstance(payload, dict) else None
    if not isinstance(token, str) or not token:
        raise AuthenticationError("Login response did not contain a token")
    return token


class NativeLoginFlow(LoginFlow):
    """Log in with email and password."""

    @property
    def kind(self) -> SchemeKind:
        return SchemeKind.NATIVE

    def describe(self) -> LoginUsage:
        return LoginUsage(
            usage="login <email>",
            arguments=("email",),
            description="Log in with your email and password.",
        )

    def authenticate(
        self,
        client: SyncClient,
        scheme: AuthScheme,
        email: Optional[str],
        terminal: Optional[TerminalInput] = None,
    ) -> str:
        """Prompt for the password and request a token for *email*.

        Raises:
            InvalidUsageError: If *email* is missing.
            EmptyPasswordError: If no password was entered.
            AuthenticationError: If the server rejects the credentials or
                answers without a token.
        """
        self.check_arguments(email)
        assert email is not None

        password = prompt_password("Password: ", terminal)

        path = f"/users/{quote(email, safe='@')}/tokens"
        try:
            response = client.post(path, json_body={"password": password})
        except (AuthError, NotFoundError, ServerError) as exc:
            raise AuthenticationError(str(exc), status_code=exc.status_code) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise AuthenticationError(
                "Login response was not valid JSON", status_code=response.status_code
            ) from exc

        logger.debug("Token issued for %s", email)
        return extract_token(payload)
