from typing import List

from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import ResourceSpec, crud_tools

FIELD_TYPES = [
    "text",
    "textarea",
    "checkbox",
    "date",
    "integer",
    "decimal",
    "regexp",
    "tagger",
    "multiselect",
]


def _field_spec(kind: str, label: str, **overrides) -> ResourceSpec:
    return ResourceSpec(
        singular=f"{kind}_field",
        plural=f"{kind}_fields",
        path=f"/{kind}_fields",
        label=f"{label} field",
        id_name="field_id",
        descriptions={"list": f"List all {label} fields (system and custom)"},
        **overrides,
    )


TICKET_FIELDS = _field_spec(
    "ticket",
    "ticket",
    create_properties={
        "type": {"type": "string", "enum": FIELD_TYPES, "description": "Field type"},
        "title": {"type": "string", "description": "Field title"},
        "description": {"type": "string", "description": "Field description"},
        "custom_field_options": {
            "type": "array",
            "description": "Options for tagger/multiselect fields",
        },
        "required": {"type": "boolean", "description": "Required field", "default": False},
        "visible_in_portal": {
            "type": "boolean",
            "description": "Visible to end users",
            "default": True,
        },
    },
    create_required=("type", "title"),
    update_properties={
        "title": {"type": "string", "description": "Field title"},
        "description": {"type": "string", "description": "Field description"},
        "active": {"type": "boolean", "description": "Active status"},
        "required": {"type": "boolean", "description": "Required field"},
    },
)

USER_FIELDS = _field_spec("user", "user", operations=("list", "get"))

ORGANIZATION_FIELDS = _field_spec("organization", "organization", operations=("list", "get"))


def tools() -> List[ToolSpec]:
    return [
        *crud_tools(TICKET_FIELDS),
        *crud_tools(USER_FIELDS),
        *crud_tools(ORGANIZATION_FIELDS),
    ]
