from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Optional, Union

from .errors import ZendeskConfigError


@dataclass(frozen=True)
class BasicCredentials:
    """Agent email plus API token, sent as ``{email}/token:{api_token}``."""

    email: str
    api_token: str

    def __repr__(self) -> str:
        return f"BasicCredentials(email={self.email!r}, api_token='***')"


@dataclass(frozen=True)
class BearerCredentials:
    oauth_token: str

    def __repr__(self) -> str:
        return "BearerCredentials(oauth_token='***')"


Credentials = Union[BasicCredentials, BearerCredentials]


def authorization_header(credentials: Credentials) -> str:
    if isinstance(credentials, BearerCredentials):
        return f"Bearer {credentials.oauth_token}"
    raw = f"{credentials.email}/token:{credentials.api_token}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def resolve_credentials(
    *,
    email: Optional[str] = None,
    api_token: Optional[str] = None,
    oauth_token: Optional[str] = None,
) -> Credentials:
    """
    Pick the credential variant to use.
    OAuth wins when present; otherwise both email and API token are required.
    """
    oauth_token = _clean(oauth_token)
    if oauth_token:
        return BearerCredentials(oauth_token=oauth_token)

    email = _clean(email)
    api_token = _clean(api_token)
    if email and api_token:
        return BasicCredentials(email=email, api_token=api_token)

    raise ZendeskConfigError("Must provide either oauth_token or email+api_token")


__all__ = [
    "BasicCredentials",
    "BearerCredentials",
    "Credentials",
    "authorization_header",
    "resolve_credentials",
]
