from __future__ import annotations

from typing import Any, Dict, List

from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import (
    ResourceSpec,
    crud_tools,
    format_id,
    id_property,
    object_schema,
    required_arg,
)

MACROS = ResourceSpec(
    singular="macro",
    plural="macros",
    path="/macros",
    label="macro",
    list_properties={"active": {"type": "boolean", "description": "Filter by active status"}},
    create_properties={
        "title": {"type": "string", "description": "Macro title"},
        "actions": {
            "type": "array",
            "description": "Macro actions (array of {field, value} objects)",
        },
        "description": {"type": "string", "description": "Macro description"},
        "active": {"type": "boolean", "description": "Active status", "default": True},
        "restriction": {
            "type": "object",
            "description": "Restriction (type: Group/User, id: number)",
        },
    },
    create_required=("title", "actions"),
    update_properties={
        "title": {"type": "string", "description": "Macro title"},
        "actions": {"type": "array", "description": "Macro actions"},
        "description": {"type": "string", "description": "Macro description"},
        "active": {"type": "boolean", "description": "Active status"},
    },
)


async def apply_macro(client: ZendeskClient, args: Dict[str, Any]) -> Any:
    """Preview a macro against a ticket; Zendesk does not save the result."""
    ticket_id = format_id(required_arg(args, "ticket_id"))
    macro_id = format_id(required_arg(args, "macro_id"))
    response = await client.get(f"/tickets/{ticket_id}/macros/{macro_id}/apply.json")
    return response.get("result")


def tools() -> List[ToolSpec]:
    return [
        *crud_tools(MACROS),
        ToolSpec(
            name="zendesk_apply_macro",
            description="Apply a macro to a ticket (returns preview without saving)",
            input_schema=object_schema(
                {
                    "macro_id": id_property("Macro ID"),
                    "ticket_id": id_property("Ticket ID"),
                },
                required=["macro_id", "ticket_id"],
            ),
            handler=apply_macro,
        ),
    ]
