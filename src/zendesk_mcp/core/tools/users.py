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

ROLES = ["end-user", "agent", "admin"]

_USER_ID = {"user_id": id_property("User ID")}

_PROFILE_FIELDS: Dict[str, Any] = {
    "name": {"type": "string", "description": "User name"},
    "email": {"type": "string", "description": "User email"},
    "verified": {"type": "boolean", "description": "Email verified status"},
    "phone": {"type": "string", "description": "Phone number"},
    "organization_id": id_property("Organization ID"),
    "time_zone": {"type": "string", "description": "Time zone"},
    "tags": {"type": "array", "items": {"type": "string"}, "description": "Tags"},
    "user_fields": {"type": "object", "description": "Custom user field values"},
}

USERS = ResourceSpec(
    singular="user",
    plural="users",
    path="/users",
    label="user",
    list_properties={
        "role": {"type": "string", "enum": ROLES, "description": "Filter by role"},
        "permission_set": {"type": "number", "description": "Filter by permission set ID"},
    },
    create_properties={
        **_PROFILE_FIELDS,
        "role": {
            "type": "string",
            "enum": ROLES,
            "description": "User role",
            "default": "end-user",
        },
        "external_id": {"type": "string", "description": "External ID for tracking"},
        "locale": {"type": "string", "description": "Locale (e.g., en-US)"},
        "details": {"type": "string", "description": "Details about the user"},
        "notes": {"type": "string", "description": "Notes about the user"},
    },
    create_required=("name",),
    update_properties={
        **_PROFILE_FIELDS,
        "role": {"type": "string", "enum": ROLES, "description": "User role"},
        "external_id": {"type": "string", "description": "External ID"},
        "locale": {"type": "string", "description": "Locale"},
        "details": {"type": "string", "description": "Details"},
        "notes": {"type": "string", "description": "Notes"},
        "suspended": {"type": "boolean", "description": "Suspended status"},
    },
    descriptions={"list": "List users with optional filtering"},
)


async def search_users(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    query = args.get("query")
    # An external id lookup replaces any free-text query.
    if args.get("external_id"):
        query = f"external_id:{args['external_id']}"
    users = await client.paginate_all("/users/search.json", {"query": query}, "users")
    return list_result("users", users)


async def merge_users(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    target = format_id(required_arg(args, "target_user_id"))
    source = required_arg(args, "source_user_id")
    return await client.put(f"/users/{target}/merge.json", {"user": {"id": source}})


async def list_user_identities(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    user_id = format_id(required_arg(args, "user_id"))
    identities = await client.paginate_all(
        f"/users/{user_id}/identities.json", {}, "identities"
    )
    return list_result("identities", identities)


async def set_user_password(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    user_id = format_id(required_arg(args, "user_id"))
    await client.post(
        f"/users/{user_id}/password.json", {"password": required_arg(args, "password")}
    )
    return {"success": True}


async def get_user_related(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    user_id = format_id(required_arg(args, "user_id"))
    return await client.get(f"/users/{user_id}/related.json")


def tools() -> List[ToolSpec]:
    return [
        *crud_tools(USERS),
        ToolSpec(
            name="zendesk_search_users",
            description="Search users by query",
            input_schema=object_schema(
                {
                    "query": {
                        "type": "string",
                        "description": "Search query (name, email, phone, etc.)",
                    },
                    "external_id": {"type": "string", "description": "Search by external ID"},
                }
            ),
            handler=search_users,
        ),
        ToolSpec(
            name="zendesk_merge_users",
            description="Merge two users",
            input_schema=object_schema(
                {
                    "source_user_id": id_property("Source user ID (will be merged and deleted)"),
                    "target_user_id": id_property("Target user ID (will receive all data)"),
                },
                required=["source_user_id", "target_user_id"],
            ),
            handler=merge_users,
        ),
        ToolSpec(
            name="zendesk_list_user_identities",
            description="List identities for a user (email, phone, etc.)",
            input_schema=object_schema(_USER_ID, required=["user_id"]),
            handler=list_user_identities,
        ),
        ToolSpec(
            name="zendesk_set_user_password",
            description="Set or change a user password",
            input_schema=object_schema(
                {**_USER_ID, "password": {"type": "string", "description": "New password"}},
                required=["user_id", "password"],
            ),
            handler=set_user_password,
        ),
        ToolSpec(
            name="zendesk_get_user_related",
            description=(
                "Get related information for a user (requested tickets, "
                "ccd tickets, assigned tickets, organizations)"
            ),
            input_schema=object_schema(_USER_ID, required=["user_id"]),
            handler=get_user_related,
        ),
    ]
