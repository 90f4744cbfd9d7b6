"""
Shared payload shaping for Zendesk business rules (triggers, automations).
"""

from typing import Any, Dict

from zendesk_mcp.core.resources import conditions_body


def rule_body(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build a trigger/automation payload from flat tool arguments.
    Only fields the caller supplied are sent, so the same shape serves
    create and partial update.
    """
    rule: Dict[str, Any] = {}
    if args.get("title"):
        rule["title"] = args["title"]
    if args.get("description"):
        rule["description"] = args["description"]
    if args.get("active") is not None:
        rule["active"] = args["active"]
    conditions = conditions_body(args)
    if conditions:
        rule["conditions"] = conditions
    if args.get("actions"):
        rule["actions"] = args["actions"]
    if args.get("category_id") is not None:
        rule["category_id"] = args["category_id"]
    return rule


def rule_properties(kind: str, *, for_create: bool) -> Dict[str, Any]:
    if for_create:
        all_desc = "All conditions (must all match)"
        any_desc = "Any conditions (at least one must match)"
        active: Dict[str, Any] = {"type": "boolean", "description": "Active status", "default": True}
    else:
        all_desc = "All conditions"
        any_desc = "Any conditions"
        active = {"type": "boolean", "description": "Active status"}
    return {
        "title": {"type": "string", "description": f"{kind} title"},
        "all_conditions": {"type": "array", "description": all_desc},
        "any_conditions": {"type": "array", "description": any_desc},
        "actions": {"type": "array", "description": f"{kind} actions"},
        "active": active,
    }
