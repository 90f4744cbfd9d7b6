from __future__ import annotations

from typing import Any, Dict, List

from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import (
    ResourceSpec,
    crud_tools,
    format_id,
    id_property,
    list_result,
    object_schema,
    required_arg,
)

_GROUP_FIELDS = {
    "name": {"type": "string", "description": "Group name"},
    "description": {"type": "string", "description": "Group description"},
}

GROUPS = ResourceSpec(
    singular="group",
    plural="groups",
    path="/groups",
    label="group",
    create_properties=_GROUP_FIELDS,
    create_required=("name",),
    update_properties=_GROUP_FIELDS,
)


async def list_group_memberships(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    group_id = format_id(required_arg(args, "group_id"))
    memberships = await client.paginate_all(
        f"/groups/{group_id}/memberships.json", {}, "group_memberships"
    )
    return list_result("group_memberships", memberships)


def tools() -> List[ToolSpec]:
    return [
        *crud_tools(GROUPS),
        ToolSpec(
            name="zendesk_list_group_memberships",
            description="List memberships for a group",
            input_schema=object_schema(
                {"group_id": id_property("Group ID")}, required=["group_id"]
            ),
            handler=list_group_memberships,
        ),
    ]
