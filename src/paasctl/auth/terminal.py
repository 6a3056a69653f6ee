"""Password capture from an interactive or piped input stream.

:func:`read_password` is the single entry point. It talks to a
:class:`TerminalInput` capability instead of a raw stream so that the
masking behaviour can be exercised without a real terminal device:

* :class:`StreamTerminal` -- the production implementation backed by a
  text stream (``sys.stdin`` unless told otherwise). Echo is switched off
  with :mod:`termios` for the duration of a masked read.
* Tests supply their own object with the same three methods.

When the stream is a terminal, echo is disabled, one line is read and echo
is restored on every exit path. When it is not (``echo pw | paasctl ...``),
one whitespace-delimited token is taken from the next line.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import IO, ContextManager, Iterator, Optional, Protocol

from paasctl.exceptions import EmptyPasswordError
from paasctl.output import prompt


class TerminalInput(Protocol):
    """What :func:`read_password` needs from an input source."""

    def is_interactive(self) -> bool:
        """Return ``True`` when input comes from a terminal device."""
        ...

    def read_line(self) -> str:
        """Read one line, including its terminator if any."""
        ...

    def echo_disabled(self) -> ContextManager[None]:
        """Context manager that hides typed characters while active."""
        ...


class StreamTerminal:
    """:class:`TerminalInput` backed by a text stream.

    Args:
        stream: The stream to read from. When ``None``, ``sys.stdin`` is
            looked up at each call so that redirected stdin (for example
            under a test runner) is honoured.
    """

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdin

    def is_interactive(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def read_line(self) -> str:
        return self.stream.readline()

    @contextmanager
    def echo_disabled(self) -> Iterator[None]:
        """Turn terminal echo off and restore the previous mode on exit."""
        import termios

        fd = self.stream.fileno()
        saved = termios.tcgetattr(fd)
        silenced = termios.tcgetattr(fd)
        silenced[3] &= ~termios.ECHO
        termios.tcsetattr(fd, termios.TCSAFLUSH, silenced)
        try:
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSAFLUSH, saved)


def read_password(terminal: Optional[TerminalInput] = None) -> str:
    """Read a password from *terminal*.

    Args:
        terminal: Input capability; defaults to a :class:`StreamTerminal`
            over ``sys.stdin``.

    Returns:
        The password, without line terminator.

    Raises:
        EmptyPasswordError: If nothing was entered.
    """
    term = terminal if terminal is not None else StreamTerminal()

    if term.is_interactive():
        with term.echo_disabled():
            password = term.read_line().rstrip("\r\n")
    else:
        tokens = term.read_line().split()
        password = tokens[0] if tokens else ""

    if not password:
        raise EmptyPasswordError()
    return password


def read_answer(terminal: Optional[TerminalInput] = None) -> str:
    """Read a single whitespace-delimited word, e.g. a ``y``/``n`` answer.

    Returns an empty string at end of input.
    """
    term = terminal if terminal is not None else StreamTerminal()
    tokens = term.read_line().split()
    return tokens[0] if tokens else ""


def prompt_password(label: str, terminal: Optional[TerminalInput] = None) -> str:
    """Show *label* on stderr and read a password.

    A newline is written after the read, whether or not it succeeded, since
    the user's Enter key was not echoed.
    """
    prompt(label)
    try:
        return read_password(terminal)
    finally:
        prompt("\n")
