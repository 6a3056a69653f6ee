"""Persistent storage for the session token.

The token lives in a single per-user file, ``<data dir>/session.json``
(``~/.local/share/paasctl/session.json`` under XDG). It is written
atomically via :func:`~paasctl.config.atomic_write` with ``0o600``
permissions so that the secret is never world-readable, even momentarily.

There is at most one session at a time: :meth:`SessionStore.persist`
overwrites whatever was stored before.

See Also:
    :class:`~paasctl.auth.manager.LoginManager` -- persists tokens produced
    by the login flows.
    :class:`~paasctl.client.sync_client.SyncClient` -- reads the token for
    authenticated requests.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from paasctl.config import atomic_write, get_data_dir
from paasctl.exceptions import NotLoggedInError
from paasctl.models import SessionToken

logger = logging.getLogger(__name__)

SESSION_FILENAME = "session.json"


class SessionStore:
    """Read, write and remove the stored session token.

    Args:
        path: Location of the session file. Defaults to
            ``get_data_dir() / "session.json"``.

    Example::

        store = SessionStore()
        store.persist("tok123")
        assert store.load().token == "tok123"
        store.clear()
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path if path is not None else get_data_dir() / SESSION_FILENAME

    @property
    def path(self) -> Path:
        """The filesystem path of the session file."""
        return self._path

    def persist(self, token: str, scheme: str = "native") -> SessionToken:
        """Store *token*, replacing any previous session.

        Args:
            token: The token issued by the server.
            scheme: Name of the auth scheme whose flow issued it.

        Returns:
            The :class:`~paasctl.models.SessionToken` that was written.

        Raises:
            OSError: If the file cannot be written.
        """
        entry = SessionToken(token=token, scheme=scheme)
        text = json.dumps(entry.model_dump(mode="json"), indent=2) + "\n"
        atomic_write(self._path, text, mode=0o600)
        logger.debug("Session token written to %s", self._path)
        return entry

    def load(self) -> Optional[SessionToken]:
        """Load the stored session.

        Returns:
            The stored :class:`~paasctl.models.SessionToken`, or ``None`` if
            the file does not exist or cannot be parsed.
        """
        if not self._path.is_file():
            return None
        try:
            text = self._path.read_text(encoding="utf-8")
            return SessionToken.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValueError, OSError) as exc:
            logger.debug("Ignoring unreadable session file %s: %s", self._path, exc)
            return None

    def exists(self) -> bool:
        """Return ``True`` when a session file is present on disk."""
        return self._path.is_file()

    def clear(self) -> None:
        """Delete the session file.

        Raises:
            NotLoggedInError: If there is no session file.
            OSError: For any other failure to remove it.
        """
        try:
            self._path.unlink()
        except FileNotFoundError:
            raise NotLoggedInError() from None
        logger.debug("Session file %s removed", self._path)
