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

_ORG_FIELDS: Dict[str, Any] = {
    "name": {"type": "string", "description": "Organization name"},
    "external_id": {"type": "string", "description": "External ID"},
    "domain_names": {"type": "array", "items": {"type": "string"}, "description": "Domain names"},
    "details": {"type": "string", "description": "Details"},
    "notes": {"type": "string", "description": "Notes"},
    "group_id": id_property("Default group ID"),
    "shared_tickets": {"type": "boolean", "description": "Enable shared tickets"},
    "shared_comments": {"type": "boolean", "description": "Enable shared comments"},
    "tags": {"type": "array", "items": {"type": "string"}, "description": "Tags"},
    "organization_fields": {
        "type": "object",
        "description": "Custom organization field values",
    },
}

ORGANIZATIONS = ResourceSpec(
    singular="organization",
    plural="organizations",
    path="/organizations",
    label="organization",
    create_properties=_ORG_FIELDS,
    create_required=("name",),
    update_properties=_ORG_FIELDS,
    descriptions={"delete": "Delete an organization"},
)


async def search_organizations(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    query = args.get("query")
    if args.get("external_id"):
        query = f"external_id:{args['external_id']}"
    orgs = await client.paginate_all(
        "/organizations/search.json", {"query": query}, "organizations"
    )
    return list_result("organizations", orgs)


async def list_organization_memberships(
    client: ZendeskClient, args: Dict[str, Any]
) -> Dict[str, Any]:
    org_id = format_id(required_arg(args, "organization_id"))
    memberships = await client.paginate_all(
        f"/organizations/{org_id}/organization_memberships.json",
        {},
        "organization_memberships",
    )
    return list_result("organization_memberships", memberships)


async def create_organization_membership(client: ZendeskClient, args: Dict[str, Any]) -> Any:
    membership = {
        "user_id": required_arg(args, "user_id"),
        "organization_id": required_arg(args, "organization_id"),
    }
    response = await client.post(
        "/organization_memberships.json", {"organization_membership": membership}
    )
    return response.get("organization_membership")


def tools() -> List[ToolSpec]:
    return [
        *crud_tools(ORGANIZATIONS),
        ToolSpec(
            name="zendesk_search_organizations",
            description="Search organizations by query",
            input_schema=object_schema(
                {
                    "query": {"type": "string", "description": "Search query (name, domain, etc.)"},
                    "external_id": {"type": "string", "description": "Search by external ID"},
                }
            ),
            handler=search_organizations,
        ),
        ToolSpec(
            name="zendesk_list_organization_memberships",
            description="List memberships for an organization",
            input_schema=object_schema(
                {"organization_id": id_property("Organization ID")},
                required=["organization_id"],
            ),
            handler=list_organization_memberships,
        ),
        ToolSpec(
            name="zendesk_create_organization_membership",
            description="Add a user to an organization",
            input_schema=object_schema(
                {
                    "user_id": id_property("User ID"),
                    "organization_id": id_property("Organization ID"),
                },
                required=["user_id", "organization_id"],
            ),
            handler=create_organization_membership,
        ),
    ]
