from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .auth import resolve_credentials
from .client import ZendeskClient
from .errors import ZendeskConfigError

ENV_HELP = {
    "ZENDESK_SUBDOMAIN": "Your Zendesk subdomain (e.g. 'acme' for acme.zendesk.com)",
    "ZENDESK_EMAIL": "Agent email used with ZENDESK_API_TOKEN",
    "ZENDESK_API_TOKEN": "API token (Admin Center > Apps and integrations > APIs)",
    "ZENDESK_OAUTH_TOKEN": "OAuth access token (alternative to email + API token)",
}


@dataclass(frozen=True)
class ZendeskSettings:
    subdomain: str = ""
    email: Optional[str] = None
    api_token: Optional[str] = None
    oauth_token: Optional[str] = None
    timeout_seconds: float = 30.0
    log_level: str = "INFO"

    @property
    def has_credentials(self) -> bool:
        try:
            resolve_credentials(
                email=self.email,
                api_token=self.api_token,
                oauth_token=self.oauth_token,
            )
        except ZendeskConfigError:
            return False
        return True


def _env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def load_env_config(*, use_dotenv: bool = True) -> ZendeskSettings:
    """Load Zendesk settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    timeout_raw = _env("ZENDESK_TIMEOUT_SECONDS")
    try:
        timeout_seconds = float(timeout_raw) if timeout_raw else 30.0
    except ValueError as exc:
        raise ZendeskConfigError(
            f"ZENDESK_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}"
        ) from exc

    return ZendeskSettings(
        subdomain=_env("ZENDESK_SUBDOMAIN") or "",
        email=_env("ZENDESK_EMAIL"),
        api_token=_env("ZENDESK_API_TOKEN"),
        oauth_token=_env("ZENDESK_OAUTH_TOKEN"),
        timeout_seconds=timeout_seconds,
        log_level=_env("ZENDESK_MCP_LOG_LEVEL") or "INFO",
    )


def create_client_from_env(
    *, use_dotenv: bool = True, **kwargs
) -> ZendeskClient:
    """Create a ZendeskClient from environment variables."""
    settings = load_env_config(use_dotenv=use_dotenv)
    if not settings.subdomain:
        raise ZendeskConfigError(
            "ZENDESK_SUBDOMAIN environment variable is required"
        )
    if not settings.has_credentials:
        raise ZendeskConfigError(
            "Must provide either ZENDESK_OAUTH_TOKEN or "
            "ZENDESK_EMAIL+ZENDESK_API_TOKEN"
        )
    kwargs.setdefault("timeout_seconds", settings.timeout_seconds)
    return ZendeskClient(
        settings.subdomain,
        email=settings.email,
        api_token=settings.api_token,
        oauth_token=settings.oauth_token,
        **kwargs,
    )


class LazyClientProvider:
    """
    Client provider that builds the client from the environment on first
    use and hands back the same instance afterwards. A configuration error
    is raised on every call until the environment is fixed.
    """

    def __init__(self, **client_kwargs):
        self._client_kwargs = client_kwargs
        self._client: Optional[ZendeskClient] = None

    @property
    def created(self) -> bool:
        return self._client is not None

    def __call__(self) -> ZendeskClient:
        if self._client is None:
            self._client = create_client_from_env(**self._client_kwargs)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = [
    "ENV_HELP",
    "ZendeskSettings",
    "load_env_config",
    "create_client_from_env",
    "LazyClientProvider",
]
