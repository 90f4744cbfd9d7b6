from __future__ import annotations

import logging
import math
from typing import Dict, Mapping, Optional

REMAINING_HEADER = "X-Rate-Limit-Remaining"
RESET_HEADER = "X-Rate-Limit-Reset"

DEFAULT_REMAINING = 700
LOW_WATERMARK = 10

log = logging.getLogger("zendesk_mcp.core.rate_limit")


def _parse_number(raw: Optional[str], name: str) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        value = None
    # nan, inf and overflowing literals like 1e400 parse but are unusable
    if value is None or not math.isfinite(value):
        log.debug("Ignoring unparseable %s header: %r", name, raw)
        return None
    return value


class RateLimitState:
    """
    Last-known quota reported by the Zendesk API.

    Owned by a single client instance and refreshed after every response.
    The pre-flight check is a plain read; concurrent callers sharing one
    client can both observe a stale ``remaining`` and proceed without
    waiting.
    """

    def __init__(self, *, now: float, remaining: int = DEFAULT_REMAINING):
        self.remaining = remaining
        self.reset_at = now  # epoch seconds

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        remaining = _parse_number(headers.get(REMAINING_HEADER), REMAINING_HEADER)
        if remaining is not None:
            self.remaining = int(remaining)

        reset = _parse_number(headers.get(RESET_HEADER), RESET_HEADER)
        if reset is not None:
            self.reset_at = reset

    def wait_seconds(self, now: float) -> float:
        if self.remaining < LOW_WATERMARK and now < self.reset_at:
            return self.reset_at - now
        return 0.0

    def snapshot(self) -> Dict[str, float]:
        return {"remaining": self.remaining, "reset_at": self.reset_at}


__all__ = [
    "RateLimitState",
    "REMAINING_HEADER",
    "RESET_HEADER",
    "DEFAULT_REMAINING",
    "LOW_WATERMARK",
]
