from __future__ import annotations

import logging
from typing import Any, Dict

from .context import current_request_id, current_tool

RESERVED_LOG_KEYS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "asctime",
}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Minimal structured logging helper.
    - Passes fields through ``extra`` so formatters can include keys.
    - Fills request_id/tool from the current context when not given.
    - Drops reserved LogRecord attributes to avoid collisions.
    """
    log = logger or logging.getLogger("zendesk_mcp.observability")
    fields.setdefault("request_id", current_request_id())
    fields.setdefault("tool", current_tool())
    extra = {"event": event, **_clean_fields(fields)}
    log.log(level, event, extra=extra)


__all__ = ["log_event"]
