"""Discovery of the server's authentication scheme.

The control plane announces how users log in through an unauthenticated
``GET /auth/scheme`` call. :class:`SchemeResolver` performs that call at
most once per invocation and falls back to the native password scheme
whenever discovery fails, so that ``login`` keeps working (and its help
text keeps rendering) against servers that are down or too old to expose
the endpoint.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, ContextManager, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from paasctl.exceptions import PaasctlError
from paasctl.models import AuthScheme

if TYPE_CHECKING:
    from paasctl.client.sync_client import SyncClient

logger = logging.getLogger(__name__)

SCHEME_PATH = "/auth/scheme"

ClientFactory = Callable[[], ContextManager["SyncClient"]]


class SchemeResolver:
    """Resolve and cache the :class:`~paasctl.models.AuthScheme`.

    Args:
        client_factory: Zero-argument callable returning an *unauthenticated*
            :class:`~paasctl.client.SyncClient` context manager. Building
            the client may itself fail (e.g. no target configured); that is
            treated like any other discovery failure.

    Example::

        resolver = SchemeResolver(lambda: SyncClient(target, authenticated=False))
        scheme = resolver.resolve()
    """

    def __init__(self, client_factory: ClientFactory) -> None:
        self._client_factory = client_factory
        self._scheme: Optional[AuthScheme] = None

    @property
    def resolved(self) -> bool:
        """Whether :meth:`resolve` has already produced a result."""
        return self._scheme is not None

    def resolve(self) -> AuthScheme:
        """Return the server's scheme, fetching it on first use.

        Never raises: any failure yields :meth:`AuthScheme.default`.
        """
        if self._scheme is None:
            self._scheme = self._fetch()
        return self._scheme

    def _fetch(self) -> AuthScheme:
        try:
            with self._client_factory() as client:
                response = client.get(SCHEME_PATH)
                payload = response.json()
            scheme = AuthScheme.model_validate(payload)
        except (PaasctlError, httpx.HTTPError, ValueError, PydanticValidationError) as exc:
            logger.debug("Scheme discovery failed, assuming native: %s", exc)
            return AuthScheme.default()

        logger.debug("Discovered auth scheme %r (%s)", scheme.name, scheme.kind.value)
        return scheme
