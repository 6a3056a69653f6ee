"""Canonical Pydantic models shared across all paasctl modules.

The models fall into two groups:

**Configuration and local state** -- serialised as JSON under the user's
config and data directories:
    :class:`RequestConfig`, :class:`GlobalConfig`, and :class:`SessionToken`.

**API payloads** -- decoded from control-plane responses:
    :class:`SchemeKind`, :class:`AuthScheme`, :class:`Team`, and
    :class:`TeamMembers`.

All models use Pydantic v2. Payload models accept unknown keys so that
newer servers adding fields do not break older clients.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Authentication scheme ---


class SchemeKind(str, enum.Enum):
    """The two login mechanisms a server can declare."""

    NATIVE = "native"
    EXTERNAL = "external"


_EXTERNAL_SCHEME_NAMES = frozenset({"oauth", "external"})


class AuthScheme(BaseModel):
    """The authentication scheme reported by ``GET /auth/scheme``.

    ``name`` is kept exactly as the server sent it. Servers announce the
    browser-based flow as ``"oauth"``; ``"external"`` is accepted as a
    synonym. Anything else is treated as the native password flow.

    Example::

        AuthScheme(name="oauth", data={"authorizeUrl": "...", "port": "0"})
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = "native"
    data: dict[str, str] = Field(default_factory=dict)

    @property
    def kind(self) -> SchemeKind:
        """Return the :class:`SchemeKind` this scheme dispatches to."""
        if self.name in _EXTERNAL_SCHEME_NAMES:
            return SchemeKind.EXTERNAL
        return SchemeKind.NATIVE

    @classmethod
    def default(cls) -> AuthScheme:
        """The scheme assumed when discovery fails."""
        return cls(name=SchemeKind.NATIVE.value, data={})


# --- Local session ---


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionToken(BaseModel):
    """The session token persisted by :class:`~paasctl.auth.SessionStore`.

    Attributes:
        token: The opaque token issued by the server.
        scheme: Name of the scheme whose login flow produced the token.
        created_at: When the token was written locally.
    """

    token: str = Field(description="Opaque session token issued by the server")
    scheme: str = Field(default="native", description="Scheme that issued the token")
    created_at: datetime = Field(default_factory=_utcnow)


# --- Configuration ---


class RequestConfig(BaseModel):
    """Default HTTP request settings applied to every API call."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/paasctl/config.json``.

    Loaded and saved by :func:`~paasctl.config.load_global_config` and
    :func:`~paasctl.config.save_global_config`. The ``target`` stored here
    has the lowest precedence; see :func:`~paasctl.config.resolve_target`.
    """

    target: Optional[str] = Field(
        default=None, description="Base URL of the platform control-plane API"
    )
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- API payloads ---


class Team(BaseModel):
    """A team entry returned by ``GET /teams``."""

    model_config = ConfigDict(extra="allow")

    name: str


class TeamMembers(BaseModel):
    """The member listing returned by ``GET /teams/{team}``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    users: list[str] = Field(default_factory=list, alias="Users")

    @field_validator("users", mode="before")
    @classmethod
    def _null_is_empty(cls, value: object) -> object:
        return [] if value is None else value
