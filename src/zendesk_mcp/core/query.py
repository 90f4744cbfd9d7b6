from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import urlencode


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_params(params: Optional[Mapping[str, Any]]) -> str:
    """
    Serialize query params in insertion order.
    Lists expand to repeated keys; None values are dropped.
    Example: {"a": 1, "b": ["x", "y"], "c": None} -> "a=1&b=x&b=y"
    """
    if not params:
        return ""

    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _to_str(v)) for v in value if v is not None)
        else:
            pairs.append((key, _to_str(value)))
    return urlencode(pairs)


def with_query(path: str, params: Optional[Mapping[str, Any]]) -> str:
    query = encode_params(params)
    if not query:
        return path
    return f"{path}?{query}"


__all__ = ["encode_params", "with_query"]
