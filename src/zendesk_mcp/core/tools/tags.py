from __future__ import annotations

from typing import Any, Dict, List

from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import list_result, object_schema, required_arg


async def list_tags(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    tags = await client.paginate_all("/tags.json", {}, "tags")
    return list_result("tags", tags)


async def autocomplete_tags(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get("/autocomplete/tags.json", {"name": required_arg(args, "name")})


def tools() -> List[ToolSpec]:
    return [
        ToolSpec(
            name="zendesk_list_tags",
            description="List all tags in use across the account",
            input_schema=object_schema(),
            handler=list_tags,
        ),
        ToolSpec(
            name="zendesk_autocomplete_tags",
            description="Autocomplete tags based on a query",
            input_schema=object_schema(
                {"name": {"type": "string", "description": "Tag prefix to autocomplete"}},
                required=["name"],
            ),
            handler=autocomplete_tags,
        ),
    ]
