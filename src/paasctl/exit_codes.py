"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~paasctl.exceptions.PaasctlError` subclass.
Shell wrappers can inspect the exit code to tell a rejected password from
an unreachable server without parsing stderr.

Example::

    $ paasctl team-list
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- session token was rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or input."""

EXIT_AUTH_FAILURE = 3
"""Authentication or authorisation failed."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an error status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
