"""Abstract base class for login flows.

This module defines the two foundational types of the login subsystem:

- :class:`LoginUsage` -- what a flow needs from the command line, used to
  render ``paasctl login`` help and to check positional arguments.
- :class:`LoginFlow` -- the abstract base class that every login mechanism
  must extend.

A flow works in two stages. :meth:`LoginFlow.describe` is consulted at
help time, before anything is executed. :meth:`LoginFlow.authenticate`
runs the interactive exchange with the server and returns the issued
session token; persisting it is the caller's job.

See Also:
    :mod:`paasctl.auth.manager` for flow registration and dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from paasctl.exceptions import InvalidUsageError
from paasctl.models import AuthScheme, SchemeKind

if TYPE_CHECKING:
    from paasctl.auth.terminal import TerminalInput
    from paasctl.client.sync_client import SyncClient


@dataclass(frozen=True)
class LoginUsage:
    """Command-line shape of a login flow.

    Attributes:
        usage: One-line usage string, e.g. ``"login <email>"``.
        arguments: Names of the required positional arguments, in order.
        description: Short help text.
    """

    usage: str
    arguments: tuple[str, ...] = field(default_factory=tuple)
    description: str = "Log in with your credentials."

    @property
    def arity(self) -> int:
        """Number of positional arguments the flow requires."""
        return len(self.arguments)


class LoginFlow(ABC):
    """Abstract base class for login flows.

    Every concrete flow must provide:

    1. A :attr:`kind` property naming the :class:`~paasctl.models.SchemeKind`
       it handles.
    2. A :meth:`describe` implementation for help and argument checks.
    3. An :meth:`authenticate` implementation that obtains a token.

    Flows are registered with :class:`~paasctl.auth.manager.LoginManager`
    and looked up by kind at runtime.
    """

    @property
    @abstractmethod
    def kind(self) -> SchemeKind:
        """Return the scheme kind this flow handles."""
        ...

    @abstractmethod
    def describe(self) -> LoginUsage:
        """Return the command-line shape of this flow."""
        ...

    @abstractmethod
    def authenticate(
        self,
        client: SyncClient,
        scheme: AuthScheme,
        email: Optional[str],
        terminal: Optional[TerminalInput] = None,
    ) -> str:
        """Run the flow and return the session token issued by the server.

        Args:
            client: An open, unauthenticated client bound to the target.
            scheme: The discovered scheme, including its ``data`` mapping.
            email: The user's email when the flow takes one.
            terminal: Input capability for interactive prompts.

        Returns:
            The opaque session token.

        Raises:
            AuthenticationError: If no token could be obtained.
        """
        ...

    def check_arguments(self, email: Optional[str]) -> None:
        """Validate the positional arguments against :meth:`describe`.

        Raises:
            InvalidUsageError: If a required argument is missing.
        """
        usage = self.describe()
        if usage.arity and not email:
            raise InvalidUsageError(
                f"Not enough arguments to call login.\n\nUsage: paasctl {usage.usage}"
            )
