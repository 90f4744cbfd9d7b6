"""Per-call context (request id, tool name) carried in ContextVars for logging."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
_tool_var: ContextVar[str | None] = ContextVar("tool", default=None)


def ensure_request_id(candidate: Optional[str] = None) -> str:
    return candidate or uuid.uuid4().hex


def current_request_id() -> Optional[str]:
    return _request_id_var.get()


def current_tool() -> Optional[str]:
    return _tool_var.get()


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    rid = ensure_request_id(request_id)
    token = _request_id_var.set(rid)
    try:
        yield rid
    finally:
        _request_id_var.reset(token)


@contextmanager
def tool_scope(name: str) -> Iterator[None]:
    token = _tool_var.set(name)
    try:
        yield
    finally:
        _tool_var.reset(token)


__all__ = [
    "ensure_request_id",
    "current_request_id",
    "current_tool",
    "request_scope",
    "tool_scope",
]
