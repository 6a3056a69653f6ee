"""Helpers for decoding control-plane responses.

Commands call :func:`decode_json` when they need the body and
:func:`require_ok` when only an exact ``200 OK`` is meaningful (team and
API-key listings). :func:`parse_model` validates decoded payloads.
"""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from paasctl.exceptions import ServerError, UnexpectedResponseError

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_json(response: httpx.Response) -> Any:
    """Return the JSON body of *response*.

    Args:
        response: A successful :class:`httpx.Response`.

    Returns:
        The decoded JSON value, or ``None`` for an empty body.

    Raises:
        ServerError: If the body is not valid JSON.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise ServerError(
            f"Invalid JSON in response from {response.request.url.path}: {exc}",
            status_code=response.status_code,
        ) from exc


def require_ok(response: httpx.Response) -> None:
    """Raise unless *response* has status exactly ``200``.

    Raises:
        UnexpectedResponseError: For any other status.
    """
    if response.status_code != httpx.codes.OK:
        raise UnexpectedResponseError(
            f"Unexpected response status {response.status_code}",
            status_code=response.status_code,
        )


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    """Validate *data* against a payload *model*.

    Raises:
        ServerError: If the server's reply does not have the expected shape.
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ServerError(f"Unexpected response from server: {exc}") from exc
