from typing import List

from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import ResourceSpec, crud_tools

BRANDS = ResourceSpec(
    singular="brand",
    plural="brands",
    path="/brands",
    label="brand",
    operations=("list", "get", "create", "update"),
    create_properties={
        "name": {"type": "string", "description": "Brand name"},
        "subdomain": {"type": "string", "description": "Brand subdomain"},
        "active": {"type": "boolean", "description": "Active status", "default": True},
    },
    create_required=("name", "subdomain"),
    update_properties={
        "name": {"type": "string", "description": "Brand name"},
        "active": {"type": "boolean", "description": "Active status"},
        "subdomain": {"type": "string", "description": "Brand subdomain"},
    },
)


def tools() -> List[ToolSpec]:
    return crud_tools(BRANDS)
