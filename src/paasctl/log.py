"""Logging setup for the paasctl CLI.

Modules log through ``logging.getLogger(__name__)``. :func:`configure_logging`
is called once per invocation from :func:`~paasctl.app.main_callback` and
routes the ``paasctl`` logger hierarchy to a :class:`rich.logging.RichHandler`
on stderr. Records from third-party loggers (``httpx``, ``httpcore``) only
surface with ``--verbose``.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

PROJECT_LOGGER = "paasctl"
_THIRD_PARTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(verbose: bool = False, no_color: bool = False) -> RichHandler:
    """Attach a fresh Rich console handler to the project logger.

    Any handler installed by a previous call is replaced, so repeated
    invocations inside one process (as in tests) do not stack handlers or
    keep writing to a stale stderr.

    Args:
        verbose: Log at DEBUG instead of WARNING, third-party loggers included.
        no_color: Disable colour in the handler's console.

    Returns:
        The installed handler.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handler = RichHandler(
        console=Console(file=sys.stderr, stderr=True, no_color=no_color),
        level=level,
        show_time=verbose,
        show_path=verbose,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    for name in (PROJECT_LOGGER, *_THIRD_PARTY_LOGGERS):
        logger = logging.getLogger(name)
        for existing in list(logger.handlers):
            if isinstance(existing, RichHandler):
                logger.removeHandler(existing)
        if name == PROJECT_LOGGER or verbose:
            logger.addHandler(handler)
        logger.setLevel(level)

    return handler
