"""HTTP client module for paasctl.

Provides :class:`SyncClient`, a blocking client backed by
:class:`httpx.Client` that injects the session token and maps error
statuses to :mod:`paasctl.exceptions`, plus small response-decoding
helpers in :mod:`paasctl.client.response`.

Example::

    from paasctl.client import SyncClient

    with SyncClient(target) as client:
        resp = client.get("/teams")
"""

from paasctl.client.sync_client import SyncClient

__all__ = ["SyncClient"]
