"""Session and login handling for paasctl.

The main entry points are:

- :class:`LoginFlow` -- abstract base class for login mechanisms.
- :class:`LoginManager` -- registry that maps a scheme kind to its flow and
  persists the token a flow returns.
- :func:`create_default_manager` -- factory pre-loaded with the native and
  OAuth flows.
- :class:`SchemeResolver` -- discovers the server's scheme once per
  invocation.
- :class:`SessionStore` -- the on-disk session token.
- :func:`read_password` -- masked password capture.

Typical usage::

    from paasctl.auth import SchemeResolver, create_default_manager

    scheme = resolver.resolve()
    create_default_manager().login(client, scheme, email)
"""

from paasctl.auth.base import LoginFlow, LoginUsage
from paasctl.auth.manager import LoginManager, create_default_manager
from paasctl.auth.scheme import SchemeResolver
from paasctl.auth.session_store import SessionStore
from paasctl.auth.terminal import (
    StreamTerminal,
    TerminalInput,
    prompt_password,
    read_answer,
    read_password,
)

__all__ = [
    "LoginFlow",
    "LoginManager",
    "LoginUsage",
    "SchemeResolver",
    "SessionStore",
    "StreamTerminal",
    "TerminalInput",
    "create_default_manager",
    "prompt_password",
    "read_answer",
    "read_password",
]
