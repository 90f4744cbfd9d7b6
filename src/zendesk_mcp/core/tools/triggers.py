from __future__ import annotations

from typing import Any, Dict, List

from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import ResourceSpec, crud_tools, object_schema, required_arg
from zendesk_mcp.core.tools._rules import rule_body, rule_properties

_DESCRIPTION = {"description": {"type": "string", "description": "Trigger description"}}

TRIGGERS = ResourceSpec(
    singular="trigger",
    plural="triggers",
    path="/triggers",
    label="trigger",
    list_properties={
        "active": {"type": "boolean", "description": "Filter by active status"},
        "category_id": {"type": "string", "description": "Filter by category ID"},
    },
    create_properties={
        **rule_properties("Trigger", for_create=True),
        **_DESCRIPTION,
        "category_id": {"type": "string", "description": "Category ID"},
    },
    create_required=("title", "all_conditions", "actions"),
    update_properties={**rule_properties("Trigger", for_create=False), **_DESCRIPTION},
    create_body=rule_body,
    update_body=rule_body,
)


async def reorder_triggers(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    await client.put(
        "/triggers/reorder.json", {"trigger_ids": required_arg(args, "trigger_ids")}
    )
    return {"success": True}


def tools() -> List[ToolSpec]:
    return [
        *crud_tools(TRIGGERS),
        ToolSpec(
            name="zendesk_reorder_triggers",
            description="Reorder triggers by providing ordered IDs",
            input_schema=object_schema(
                {
                    "trigger_ids": {
                        "type": "array",
                        "items": {"type": "number"},
                        "description": "Ordered array of trigger IDs",
                    }
                },
                required=["trigger_ids"],
            ),
            handler=reorder_triggers,
        ),
    ]
