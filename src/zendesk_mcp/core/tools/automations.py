from typing import List

from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import ResourceSpec, crud_tools
from zendesk_mcp.core.tools._rules import rule_body, rule_properties

AUTOMATIONS = ResourceSpec(
    singular="automation",
    plural="automations",
    path="/automations",
    label="automation",
    list_properties={"active": {"type": "boolean", "description": "Filter by active status"}},
    create_properties=rule_properties("Automation", for_create=True),
    create_required=("title", "all_conditions", "actions"),
    update_properties=rule_properties("Automation", for_create=False),
    create_body=rule_body,
    update_body=rule_body,
    descriptions={"delete": "Delete an automation"},
)


def tools() -> List[ToolSpec]:
    return crud_tools(AUTOMATIONS)
