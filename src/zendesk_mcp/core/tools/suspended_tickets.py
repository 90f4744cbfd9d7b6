from __future__ import annotations

from typing import Any, Dict, List

from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import (
    ResourceSpec,
    crud_tools,
    format_id,
    object_schema,
    required_arg,
)

SUSPENDED_TICKETS = ResourceSpec(
    singular="suspended_ticket",
    plural="suspended_tickets",
    path="/suspended_tickets",
    label="suspended ticket",
    operations=("list", "get", "delete"),
    descriptions={
        "list": "List suspended tickets",
        "delete": "Permanently delete a suspended ticket",
    },
)


async def recover_suspended_ticket(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    ticket_id = format_id(required_arg(args, SUSPENDED_TICKETS.id_arg))
    return await client.put(f"/suspended_tickets/{ticket_id}/recover.json", {})


def tools() -> List[ToolSpec]:
    return [
        *crud_tools(SUSPENDED_TICKETS),
        ToolSpec(
            name="zendesk_recover_suspended_ticket",
            description="Recover a suspended ticket (create as a new ticket)",
            input_schema=object_schema(
                SUSPENDED_TICKETS.id_schema(), required=[SUSPENDED_TICKETS.id_arg]
            ),
            handler=recover_suspended_ticket,
        ),
    ]
