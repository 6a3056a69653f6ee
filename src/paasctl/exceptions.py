"""Exception hierarchy for paasctl.

All exceptions inherit from :class:`PaasctlError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`paasctl.exit_codes`.
Commands catch ``PaasctlError``, print the message to stderr and exit with
the error's code, while unexpected exceptions reaching
:func:`paasctl.app.main` produce a crash log and exit with
:data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    PaasctlError (exit 1)
    +-- InvalidUsageError        (exit 2)
    +-- ValidationError          (exit 2)
    |   +-- EmptyPasswordError
    |   +-- PasswordMismatchError
    +-- AuthError                (exit 3)
    |   +-- AuthenticationError
    +-- NotFoundError            (exit 4)
    +-- ServerError              (exit 5)
    |   +-- UnexpectedResponseError
    +-- ConnectionError_         (exit 6)
    +-- ConfigError              (exit 1)
    +-- NotLoggedInError         (exit 1)
"""

from __future__ import annotations

from paasctl.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)


class PaasctlError(Exception):
    """Base exception for all paasctl errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`paasctl.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
        status_code: HTTP status of the response that caused the error,
            when there was one.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code
        self.status_code = status_code


class InvalidUsageError(PaasctlError):
    """Raised for a wrong number of positional arguments."""

    exit_code = EXIT_INVALID_USAGE


class ValidationError(PaasctlError):
    """Raised when locally collected input is rejected before any request."""

    exit_code = EXIT_INVALID_USAGE


class EmptyPasswordError(ValidationError):
    """Raised when the password read from the terminal is empty."""

    def __init__(self, message: str = "You must provide the password!"):
        super().__init__(message)


class PasswordMismatchError(ValidationError):
    """Raised when a password and its confirmation differ."""


class AuthError(PaasctlError):
    """Raised when the API rejects the session (HTTP 401/403)."""

    exit_code = EXIT_AUTH_FAILURE


class AuthenticationError(AuthError):
    """Raised when a login flow cannot obtain a session token."""


class NotFoundError(PaasctlError):
    """Raised when the API returns HTTP 404 (resource not found)."""

    exit_code = EXIT_NOT_FOUND


class ServerError(PaasctlError):
    """Raised when the API returns an error status other than 401/403/404."""

    exit_code = EXIT_SERVER_ERROR


class UnexpectedResponseError(ServerError):
    """Raised when a successful status differs from the one a command expects."""


class ConnectionError_(PaasctlError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(PaasctlError):
    """Raised for configuration problems (no target, invalid JSON, bad URL)."""

    exit_code = EXIT_GENERIC_FAILURE


class NotLoggedInError(PaasctlError):
    """Raised when the session file to remove does not exist."""

    def __init__(self, message: str = "You're not logged in!"):
        super().__init__(message)
