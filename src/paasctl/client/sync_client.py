"""Synchronous HTTP client for the platform control-plane API.

This module provides :class:`SyncClient`, the blocking HTTP client used by
every paasctl command. It wraps :class:`httpx.Client` and layers on:

- **Session injection** -- the stored session token (or ``PAASCTL_TOKEN``)
  is sent as ``Authorization: bearer <token>`` on authenticated requests.
- **Error mapping** -- network failures and error statuses become typed
  :class:`~paasctl.exceptions.PaasctlError` subclasses carrying the HTTP
  status.
- **Bounded timeout** -- every call uses the configured request timeout.

Requests are never retried: a failed call is reported immediately.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from paasctl.auth.session_store import SessionStore
from paasctl.config import resolve_env_token
from paasctl.exceptions import AuthError, ConnectionError_, NotFoundError, ServerError
from paasctl.models import RequestConfig

logger = logging.getLogger(__name__)


class SyncClient:
    """Synchronous HTTP client for API calls.

    Must be used as a context manager so that the underlying transport is
    properly opened and closed.

    Args:
        target: Base URL of the control-plane API.
        session_store: Where to read the session token from. When ``None``,
            the default :class:`~paasctl.auth.session_store.SessionStore`
            is used.
        authenticated: When ``False``, no ``Authorization`` header is sent
            (scheme discovery, login).
        request_config: Timeout and TLS settings.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        with SyncClient("https://paas.example.com") as client:
            response = client.get("/teams")
    """

    def __init__(
        self,
        target: str,
        session_store: Optional[SessionStore] = None,
        authenticated: bool = True,
        request_config: Optional[RequestConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._target = target.rstrip("/")
        self._session_store = session_store
        self._authenticated = authenticated
        self._request_config = request_config or RequestConfig()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def target(self) -> str:
        """The base URL requests are sent to."""
        return self._target

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SyncClient:
        kwargs: dict[str, Any] = {
            "base_url": self._target,
            "timeout": self._request_config.timeout,
            "verify": self._request_config.verify_ssl,
            "follow_redirects": True,
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        self._client = httpx.Client(**kwargs)
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        json_body: Optional[Any] = None,
        raise_for_status: bool = True,
    ) -> httpx.Response:
        """Send one HTTP request and map failures to typed errors.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: URL path appended to the target.
            params: Query parameters.
            headers: Extra request headers.
            json_body: JSON-serialisable body.
            raise_for_status: When ``False``, error statuses are returned
                to the caller instead of raised.

        Returns:
            The :class:`httpx.Response` from the server.

        Raises:
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            ServerError: On any other status >= 400.
            ConnectionError_: When the request never produced a response (network,
                timeout, proxy or redirect-loop failures).
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        merged_headers: dict[str, str] = {"Accept": "application/json"}
        merged_headers.update(self._auth_headers())
        merged_headers.update(headers or {})

        kwargs: dict[str, Any] = {
            "method": method,
            "url": path,
            "headers": merged_headers,
        }
        if params:
            kwargs["params"] = params
        if json_body is not None:
            kwargs["json"] = json_body

        logger.debug("%s %s%s", method.upper(), self._target, path)
        try:
            response = self._client.request(**kwargs)
        except httpx.RequestError as exc:
            raise ConnectionError_(
                f"Could not reach {self._target}: {exc}"
            ) from exc
        logger.debug("HTTP %s from %s %s", response.status_code, method.upper(), path)

        if raise_for_status:
            self._map_response_error(response)
        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a GET request."""
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a POST request."""
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a PUT request."""
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a DELETE request."""
        return self.request("DELETE", path, **kwargs)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _auth_headers(self) -> dict[str, str]:
        """Build the ``Authorization`` header from the current session."""
        if not self._authenticated:
            return {}

        token = resolve_env_token()
        if token is None:
            store = self._session_store or SessionStore()
            entry = store.load()
            token = entry.token if entry is not None else None

        if token is None:
            logger.debug("No session token available; sending request unauthenticated")
            return {}
        return {"Authorization": f"bearer {token}"}

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return

        # The API usually answers errors with a plain-text body; JSON bodies
        # with a message field are accepted too.
        try:
            detail = response.json()
            if isinstance(detail, dict):
                msg = detail.get("message") or detail.get("error") or detail.get("detail") or ""
            else:
                msg = str(detail)
        except ValueError:
            msg = response.text.strip()[:200] if response.text else ""

        full_msg = msg if msg else f"HTTP {status}"

        if status in (401, 403):
            raise AuthError(full_msg, status_code=status)
        if status == 404:
            raise NotFoundError(full_msg, status_code=status)
        raise ServerError(full_msg, status_code=status)
