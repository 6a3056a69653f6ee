"""OAuth login flow -- open the browser, capture the code, trade it for a token.

The server's scheme data drives the flow:

``authorizeUrl``
    The provider's authorization URL. It contains the literal placeholder
    ``__redirect_url__``, replaced with ``http://localhost:<port>``.
``port``
    Port for the local callback server. ``"0"`` (the default) lets the OS
    pick a free one.

The authorization code delivered to the callback is posted to
``/auth/login`` together with the redirect URL, and the ``token`` field of
the reply becomes the session token.

See Also:
    :class:`paasctl.auth.base.LoginFlow` for the base interface.
    :func:`paasctl.plugins.native_login.plugin.extract_token` for the
    reply parsing shared with the native flow.
"""

from __future__ import annotations

import logging
import threading
import time
import webbrowser
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Callable, Optional
from urllib.parse import parse_qs, urlparse

from paasctl.auth.base import LoginFlow, LoginUsage
from paasctl.auth.terminal import TerminalInput
from paasctl.client.sync_client import SyncClient
from paasctl.exceptions import AuthenticationError, AuthError, NotFoundError, ServerError
from paasctl.models import AuthScheme, SchemeKind
from paasctl.output import info
from paasctl.plugins.native_login.plugin import extract_token

logger = logging.getLogger(__name__)

REDIRECT_PLACEHOLDER = "__redirect_url__"
LOGIN_PATH = "/auth/login"
DEFAULT_CALLBACK_TIMEOUT = 120.0
# Longest wait for the request line once a connection is accepted.
REQUEST_READ_TIMEOUT = 5.0

_SUCCESS_PAGE = (
    "<html><body><h2>Login successful! You can close this window "
    "and return to the terminal.</h2></body></html>"
)
_FAILURE_PAGE = "<html><body><h2>Login failed: {reason}</h2></body></html>"


def _parse_port(raw: Optional[str]) -> int:
    try:
        port = int(raw or "0")
    except ValueError:
        raise AuthenticationError(f"Invalid callback port in auth scheme: {raw!r}") from None
    if not 0 <= port <= 65535:
        raise AuthenticationError(f"Invalid callback port in auth scheme: {raw!r}")
    return port


class OAuthLoginFlow(LoginFlow):
    """Log in through the browser using the server's OAuth provider.

    Args:
        open_browser: Callable used to open the authorization URL. Defaults
            to :func:`webbrowser.open`.
        callback_timeout: Seconds to wait for the browser to hit the
            callback server.
    """

    def __init__(
        self,
        open_browser: Optional[Callable[[str], Any]] = None,
        callback_timeout: float = DEFAULT_CALLBACK_TIMEOUT,
    ) -> None:
        self._open_browser = open_browser or webbrowser.open
        self._callback_timeout = callback_timeout

    @property
    def kind(self) -> SchemeKind:
        return SchemeKind.EXTERNAL

    def describe(self) -> LoginUsage:
        return LoginUsage(
            usage="login",
            arguments=(),
            description="Log in through your browser.",
        )

    def authenticate(
        self,
        client: SyncClient,
        scheme: AuthScheme,
        email: Optional[str],
        terminal: Optional[TerminalInput] = None,
    ) -> str:
        """Run the browser login and return the issued token.

        *email* and *terminal* are unused; the provider collects the
        credentials.

        Raises:
            AuthenticationError: If the scheme data is incomplete, the
                callback reports an error or never arrives, or the code
                exchange fails.
        """
        authorize_url = scheme.data.get("authorizeUrl")
        if not authorize_url:
            raise AuthenticationError("Auth scheme is missing 'authorizeUrl'")
        port = _parse_port(scheme.data.get("port"))

        code, redirect_url = self._wait_for_code(authorize_url, port)
        return self._exchange_code(client, code, redirect_url)

    # ------------------------------------------------------------------
    # Callback server
    # ------------------------------------------------------------------

    def _wait_for_code(self, authorize_url: str, port: int) -> tuple[str, str]:
        """Serve the redirect target until the provider delivers a code.

        Returns:
            The authorization code and the redirect URL it was sent to.
        """
        result: dict[str, Optional[str]] = {"code": None, "error": None}

        class CallbackHandler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:
                params = parse_qs(urlparse(self.path).query)

                if "error" in params:
                    result["error"] = params["error"][0]
                    body = _FAILURE_PAGE.format(reason=result["error"])
                elif "code" in params:
                    result["code"] = params["code"][0]
                    body = _SUCCESS_PAGE
                else:
                    # favicon and other stray requests
                    self.send_response(404)
                    self.end_headers()
                    return

                self.send_response(200)
                self.send_header("Content-Type", "text/html; charset=utf-8")
                self.end_headers()
                self.wfile.write(body.encode("utf-8"))

            def log_message(self, format: str, *args: Any) -> None:
                logger.debug("callback: " + format, *args)

        try:
            server = HTTPServer(("127.0.0.1", port), CallbackHandler)
        except OSError as exc:
            raise AuthenticationError(
                f"Could not start the login callback server on port {port}: {exc}"
            ) from exc

        try:
            bound_port = server.server_address[1]
            redirect_url = f"http://localhost:{bound_port}"
            login_url = authorize_url.replace(REDIRECT_PLACEHOLDER, redirect_url, 1)

            info(f"Opening the browser to log in. If it does not open, visit:\n\n    {login_url}\n")
            threading.Thread(target=self._open_browser, args=(login_url,), daemon=True).start()

            deadline = time.monotonic() + self._callback_timeout
            while result["code"] is None and result["error"] is None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                server.timeout = remaining
                CallbackHandler.timeout = min(REQUEST_READ_TIMEOUT, remaining)
                server.handle_request()
        finally:
            server.server_close()

        if result["error"]:
            raise AuthenticationError(f"Login was not authorized: {result['error']}")
        if not result["code"]:
            raise AuthenticationError("Timed out waiting for the login callback")
        return result["code"], redirect_url

    # ------------------------------------------------------------------
    # Code exchange
    # ------------------------------------------------------------------

    def _exchange_code(self, client: SyncClient, code: str, redirect_url: str) -> str:
        try:
            response = client.post(
                LOGIN_PATH, json_body={"code": code, "redirectUrl": redirect_url}
            )
        except (AuthError, NotFoundError, ServerError) as exc:
            raise AuthenticationError(
                f"Code exchange failed: {exc}", status_code=exc.status_code
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise AuthenticationError(
                "Login response was not valid JSON", status_code=response.status_code
            ) from exc
        return extract_token(payload)
