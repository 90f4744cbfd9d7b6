import time
from typing import Any, Dict, List

from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import object_schema


async def system_ping(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Simple connectivity and latency check against the Zendesk account.
    Returns status, the authenticated user's name and id, and the last
    known rate-limit state.
    """
    start = time.perf_counter()

    payload = await client.get("/users/me.json")

    latency_ms = (time.perf_counter() - start) * 1000
    user = payload.get("user") or {}

    return {
        "status": "ok",
        "latency_ms": round(latency_ms, 2),
        "user_name": user.get("name", "Unknown"),
        "user_id": user.get("id"),
        "instance_url": client.base_url,
        "rate_limit": client.rate_limit_status(),
    }


def tools() -> List[ToolSpec]:
    return [
        ToolSpec(
            name="zendesk_system_ping",
            description="Check connectivity and credentials against the Zendesk account",
            input_schema=object_schema(),
            handler=system_ping,
        ),
    ]
