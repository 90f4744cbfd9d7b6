from __future__ import annotations

from typing import Any, Dict, List

from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import list_result, object_schema, required_arg

SEARCH_PATH = "/search.json"


async def search(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    params = {
        "query": required_arg(args, "query"),
        "sort_by": args.get("sort_by"),
        "sort_order": args.get("sort_order"),
    }
    results = await client.paginate_all(SEARCH_PATH, params, "results")
    return list_result("results", results)


async def search_tickets(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    query = f"type:ticket {required_arg(args, 'query')}"
    results = await client.paginate_all(SEARCH_PATH, {"query": query}, "results")
    return list_result("tickets", results)


def tools() -> List[ToolSpec]:
    return [
        ToolSpec(
            name="zendesk_search",
            description="Universal search across tickets, users, and organizations",
            input_schema=object_schema(
                {
                    "query": {
                        "type": "string",
                        "description": "Search query (supports Zendesk search syntax)",
                    },
                    "sort_by": {"type": "string", "description": "Field to sort by"},
                    "sort_order": {
                        "type": "string",
                        "enum": ["asc", "desc"],
                        "description": "Sort order",
                    },
                },
                required=["query"],
            ),
            handler=search,
        ),
        ToolSpec(
            name="zendesk_search_tickets",
            description="Search specifically for tickets",
            input_schema=object_schema(
                {"query": {"type": "string", "description": "Search query"}},
                required=["query"],
            ),
            handler=search_tickets,
        ),
    ]
