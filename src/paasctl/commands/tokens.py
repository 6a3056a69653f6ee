"""API key commands -- ``token-show`` and ``token-regenerate``.

Both endpoints answer with the key as a bare JSON string and print it only
on ``200 OK``; any other successful status is reported as unexpected.
"""

from __future__ import annotations

import httpx
import typer

from paasctl.client.response import decode_json, require_ok
from paasctl.commands.common import exits_on_error, open_client
from paasctl.exceptions import ServerError
from paasctl.output import print_data

API_KEY_PATH = "/users/api-key"


def _api_key(response: httpx.Response) -> str:
    require_ok(response)
    key = decode_json(response)
    if not isinstance(key, str):
        raise ServerError("Unexpected API key format", status_code=response.status_code)
    return key


@exits_on_error
def token_show(ctx: typer.Context) -> None:
    """Show your API key."""
    with open_client(ctx) as client:
        response = client.get(API_KEY_PATH)
    print_data(f"API key: {_api_key(response)}")


@exits_on_error
def token_regenerate(ctx: typer.Context) -> None:
    """Generate a new API key. If there is already a key, it is replaced."""
    with open_client(ctx) as client:
        response = client.post(API_KEY_PATH)
    print_data(f"Your new API key is: {_api_key(response)}")
