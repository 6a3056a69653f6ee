"""User account commands.

Provides ``user-create``, ``user-remove``, ``change-password`` and
``reset-password``. Passwords are always read from the terminal, masked
when it is interactive, and confirmation mismatches are rejected before
any request is sent.

Password reset is a two-step process: ``reset-password <email>`` asks the
server to mail a reset token, then ``reset-password <email> --token T``
resets the password and mails the new one.
"""

from __future__ import annotations

from typing import Optional

import typer

from paasctl.auth.terminal import prompt_password, read_answer
from paasctl.commands.common import (
    exits_on_error,
    get_session_store,
    get_state,
    get_terminal,
    open_client,
    path_segment,
)
from paasctl.exceptions import (
    NotFoundError,
    PaasctlError,
    PasswordMismatchError,
    ServerError,
)
from paasctl.output import print_data, prompt

_RESET_STARTED = "You've successfully started the password reset process.\n\nPlease check your email."
_RESET_DONE = "Your password has been reset and mailed to you.\n\nPlease check your email."


@exits_on_error
def user_create(
    ctx: typer.Context,
    email: str = typer.Argument(help="Email of the new user."),
) -> None:
    """Create a user.

    Prompts for the password twice. Servers that delegate accounts to an
    external provider answer 404 or 405, reported as disabled user creation.

    Example::

        paasctl user-create me@example.com
    """
    terminal = get_terminal(ctx)
    password = prompt_password("Password: ", terminal)
    confirmation = prompt_password("Confirm: ", terminal)
    if password != confirmation:
        raise PasswordMismatchError("Passwords didn't match.")

    with open_client(ctx) as client:
        try:
            client.post("/users", json_body={"email": email, "password": password})
        except (NotFoundError, ServerError) as exc:
            if exc.status_code in (404, 405):
                raise PaasctlError("User creation is disabled.", status_code=exc.status_code) from exc
            raise

    print_data(f'User "{email}" successfully created!')


@exits_on_error
def user_remove(ctx: typer.Context) -> None:
    """Remove your user from the platform.

    Only an answer of exactly ``y`` proceeds. The local session is cleared
    afterwards since its token is no longer valid.
    """
    if not get_state(ctx).get("force"):
        prompt("Are you sure you want to remove your user? (y/n) ")
        if read_answer(get_terminal(ctx)) != "y":
            print_data("Abort.")
            return

    with open_client(ctx) as client:
        client.delete("/users")

    store = get_session_store(ctx)
    if store.exists():
        store.clear()
    print_data("User successfully removed.")


@exits_on_error
def change_password(ctx: typer.Context) -> None:
    """Change your password."""
    terminal = get_terminal(ctx)
    old = prompt_password("Current password: ", terminal)
    new = prompt_password("New password: ", terminal)
    confirmation = prompt_password("Confirm: ", terminal)
    if new != confirmation:
        raise PasswordMismatchError("New password and password confirmation didn't match.")

    with open_client(ctx) as client:
        client.put("/users/password", json_body={"old": old, "new": new})
    print_data("Password successfully updated!")


@exits_on_error
def reset_password(
    ctx: typer.Context,
    email: str = typer.Argument(help="Email of the account to reset."),
    token: Optional[str] = typer.Option(
        None, "--token", "-t", help="Reset token received by email."
    ),
) -> None:
    """Reset a user's password.

    This process is composed of two steps:

    1. Generate a new token (run without --token). The token is mailed.

    2. Reset the password using the token (--token). The new password
    is mailed too.
    """
    params = {"token": token} if token else None
    with open_client(ctx) as client:
        client.post(f"/users/{path_segment(email)}/password", params=params)
    print_data(_RESET_DONE if token else _RESET_STARTED)
