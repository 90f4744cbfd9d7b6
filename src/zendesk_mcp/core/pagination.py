"""
Page-to-page navigation for Zendesk list endpoints.

Zendesk list responses carry one of three continuation styles:
  - cursor: ``meta.has_more`` + ``meta.after_cursor``
  - link:   ``links.next`` (absolute URL with query string)
  - legacy: ``meta.after_url`` (offset pagination, still honored)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from .models import parse_links, parse_meta
from .observability import log_event

DEFAULT_PAGE_SIZE = 100

log = logging.getLogger("zendesk_mcp.core.pagination")

# (path or None to keep the current path, params for the next request)
NextPage = Tuple[Optional[str], Dict[str, Any]]


def first_array_key(payload: Mapping[str, Any]) -> Optional[str]:
    for key, value in payload.items():
        if isinstance(value, list):
            return key
    return None


def resolve_page_size(params: Optional[Mapping[str, Any]]) -> Any:
    if params and params.get("page_size"):
        return params["page_size"]
    return DEFAULT_PAGE_SIZE


def next_page(
    payload: Dict[str, Any],
    base_params: Mapping[str, Any],
    page_size: Any,
    *,
    path: Optional[str] = None,
) -> Optional[NextPage]:
    """
    Decide where the next page lives. First match wins: cursor, link, legacy.
    Returns None when there is nothing more to fetch.
    """
    meta = parse_meta(payload)
    links = parse_links(payload)

    if meta.has_more and meta.after_cursor:
        params = {**base_params, "page_size": page_size, "cursor": meta.after_cursor}
        return None, params

    if links.next:
        return links.next, {}

    if meta.after_url:
        return meta.after_url, {}

    if meta.has_more:
        # Server claims more data but gave no way to reach it.
        log_event(
            "pagination_truncated",
            logger=log,
            level=logging.WARNING,
            endpoint=path,
        )
    return None


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "first_array_key",
    "resolve_page_size",
    "next_page",
]
