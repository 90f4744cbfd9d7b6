from __future__ import annotations

from typing import Any, Dict, List

from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import (
    ResourceSpec,
    conditions_body,
    crud_tools,
    format_id,
    id_property,
    list_result,
    object_schema,
    required_arg,
    split_id,
)

_VIEW_ID = {"view_id": id_property("View ID")}
_COLUMNS = {"type": "array", "items": {"type": "string"}, "description": "Columns to display"}


def build_view_body(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Reshape flat tool arguments into a Zendesk view payload:
    ``all_conditions``/``any_conditions`` -> ``conditions.all``/``conditions.any``
    and ``output_columns`` -> ``execution.columns``. Absent fields are omitted.
    """
    view: Dict[str, Any] = {}
    if args.get("title"):
        view["title"] = args["title"]
    if args.get("active") is not None:
        view["active"] = args["active"]
    conditions = conditions_body(args)
    if conditions:
        view["conditions"] = conditions
    if args.get("output_columns"):
        view["execution"] = {"columns": args["output_columns"]}
    if args.get("restriction"):
        view["restriction"] = args["restriction"]
    return view


VIEWS = ResourceSpec(
    singular="view",
    plural="views",
    path="/views",
    label="view",
    operations=("list", "get", "create", "delete"),
    list_properties={"active": {"type": "boolean", "description": "Filter by active status"}},
    create_properties={
        "title": {"type": "string", "description": "View title"},
        "all_conditions": {"type": "array", "description": "All conditions (must all match)"},
        "any_conditions": {
            "type": "array",
            "description": "Any conditions (at least one must match)",
        },
        "output_columns": _COLUMNS,
        "restriction": {
            "type": "object",
            "description": "Restriction (type: Group/User, id: number)",
        },
    },
    create_required=("title", "all_conditions"),
    create_body=build_view_body,
)


async def update_view(client: ZendeskClient, args: Dict[str, Any]) -> Any:
    view_id, data = split_id(args, "view_id")
    # restriction is create-only
    data.pop("restriction", None)
    response = await client.put(f"/views/{view_id}.json", {"view": build_view_body(data)})
    return response.get("view")


async def execute_view(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    view_id, params = split_id(args, "view_id")
    tickets = await client.paginate_all(f"/views/{view_id}/tickets.json", params, "tickets")
    return list_result("tickets", tickets)


async def count_view(client: ZendeskClient, args: Dict[str, Any]) -> Any:
    view_id = format_id(required_arg(args, "view_id"))
    response = await client.get(f"/views/{view_id}/count.json")
    return response.get("view_count")


def tools() -> List[ToolSpec]:
    return [
        *crud_tools(VIEWS),
        ToolSpec(
            name="zendesk_update_view",
            description="Update an existing view",
            input_schema=object_schema(
                {
                    **_VIEW_ID,
                    "title": {"type": "string", "description": "View title"},
                    "active": {"type": "boolean", "description": "Active status"},
                    "all_conditions": {"type": "array", "description": "All conditions"},
                    "any_conditions": {"type": "array", "description": "Any conditions"},
                    "output_columns": _COLUMNS,
                },
                required=["view_id"],
            ),
            handler=update_view,
        ),
        ToolSpec(
            name="zendesk_execute_view",
            description="Execute a view and get the tickets that match",
            input_schema=object_schema(
                {
                    **_VIEW_ID,
                    "sort_by": {"type": "string", "description": "Field to sort by"},
                    "sort_order": {
                        "type": "string",
                        "enum": ["asc", "desc"],
                        "description": "Sort order",
                    },
                },
                required=["view_id"],
            ),
            handler=execute_view,
        ),
        ToolSpec(
            name="zendesk_count_view",
            description="Get the count of tickets in a view",
            input_schema=object_schema(_VIEW_ID, required=["view_id"]),
            handler=count_view,
        ),
    ]
