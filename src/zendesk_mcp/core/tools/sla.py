from typing import Any, Dict, List

from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import ResourceSpec, crud_tools, drop_none


def build_policy_body(args: Dict[str, Any]) -> Dict[str, Any]:
    # A policy always carries a filter, even when it matches everything.
    return drop_none(
        {
            "title": args.get("title"),
            "description": args.get("description"),
            "filter": {"all": args.get("filter_conditions") or []},
            "policy_metrics": args.get("policy_metrics"),
        }
    )


def build_policy_update(args: Dict[str, Any]) -> Dict[str, Any]:
    policy: Dict[str, Any] = {}
    if args.get("title"):
        policy["title"] = args["title"]
    if args.get("description"):
        policy["description"] = args["description"]
    if args.get("filter_conditions"):
        policy["filter"] = {"all": args["filter_conditions"]}
    if args.get("policy_metrics"):
        policy["policy_metrics"] = args["policy_metrics"]
    return policy


SLA_POLICIES = ResourceSpec(
    singular="sla_policy",
    plural="sla_policies",
    path="/slas/policies",
    label="SLA policy",
    id_name="policy_id",
    id_description="SLA Policy ID",
    create_properties={
        "title": {"type": "string", "description": "Policy title"},
        "description": {"type": "string", "description": "Policy description"},
        "filter_conditions": {
            "type": "array",
            "description": "Filter conditions (all must match)",
        },
        "policy_metrics": {"type": "array", "description": "Policy metrics with targets"},
    },
    create_required=("title", "policy_metrics"),
    update_properties={
        "title": {"type": "string", "description": "Policy title"},
        "description": {"type": "string", "description": "Policy description"},
        "filter_conditions": {"type": "array", "description": "Filter conditions"},
        "policy_metrics": {"type": "array", "description": "Policy metrics"},
    },
    create_body=build_policy_body,
    update_body=build_policy_update,
    descriptions={"delete": "Delete an SLA policy"},
)


def tools() -> List[ToolSpec]:
    return crud_tools(SLA_POLICIES)
