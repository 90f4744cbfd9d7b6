from typing import List

from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import ResourceSpec, crud_tools

SATISFACTION_RATINGS = ResourceSpec(
    singular="satisfaction_rating",
    plural="satisfaction_ratings",
    path="/satisfaction_ratings",
    label="satisfaction rating",
    id_name="rating_id",
    id_description="Satisfaction rating ID",
    operations=("list", "get"),
    list_properties={
        "score": {
            "type": "string",
            "enum": ["offered", "unoffered", "good", "bad"],
            "description": "Filter by score",
        },
        "start_time": {"type": "string", "description": "Start time (ISO 8601)"},
        "end_time": {"type": "string", "description": "End time (ISO 8601)"},
        "sort_by": {
            "type": "string",
            "enum": ["created_at", "updated_at"],
            "description": "Sort by field",
        },
        "sort_order": {"type": "string", "enum": ["asc", "desc"], "description": "Sort order"},
    },
    descriptions={"list": "List satisfaction ratings"},
)


def tools() -> List[ToolSpec]:
    return crud_tools(SATISFACTION_RATINGS)
