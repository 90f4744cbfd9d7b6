from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError


class ErrorDetail(BaseModel):
    title: Optional[str] = None
    message: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class ErrorBody(BaseModel):
    """
    Zendesk error envelope: ``{"error": "...", "description": "..."}``.
    Some endpoints send ``error`` as an object with title/message instead.
    """

    error: Union[str, ErrorDetail, None] = None
    description: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    def to_message(self) -> Optional[str]:
        error = self.error
        description = self.description
        if isinstance(error, ErrorDetail):
            # An object error's message stands in for a missing description.
            if error.title:
                description = description or error.message
            error = error.title or error.message
        if not error:
            return None
        return f"{error}: {description or ''}"


class PageMeta(BaseModel):
    has_more: bool = False
    after_cursor: Optional[str] = None
    after_url: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class PageLinks(BaseModel):
    next: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


def parse_meta(payload: Dict[str, Any]) -> PageMeta:
    raw = payload.get("meta")
    if not isinstance(raw, dict):
        return PageMeta()
    try:
        return PageMeta.model_validate(raw)
    except ValidationError:
        return PageMeta()


def parse_links(payload: Dict[str, Any]) -> PageLinks:
    raw = payload.get("links")
    if not isinstance(raw, dict):
        return PageLinks()
    try:
        return PageLinks.model_validate(raw)
    except ValidationError:
        return PageLinks()


__all__ = [
    "ErrorBody",
    "ErrorDetail",
    "PageMeta",
    "PageLinks",
    "parse_meta",
    "parse_links",
]
