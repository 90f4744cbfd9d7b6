from __future__ import annotations

from typing import Any, Dict, Optional


class ZendeskClientError(Exception):
    """Base error for client failures."""


class ZendeskConfigError(ValueError):
    """Raised at construction time when subdomain or credentials are incomplete."""


class ZendeskHTTPError(ZendeskClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message
        self.response_json = response_json
        self.response_text = response_text


class ZendeskParseError(ZendeskClientError):
    pass


__all__ = [
    "ZendeskClientError",
    "ZendeskConfigError",
    "ZendeskHTTPError",
    "ZendeskParseError",
]
