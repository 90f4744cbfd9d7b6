from __future__ import annotations

from typing import Any, Dict, List

from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.registry import ToolSpec
from zendesk_mcp.core.resources import (
    ResourceSpec,
    crud_tools,
    drop_none,
    format_id,
    id_property,
    list_result,
    object_schema,
    required_arg,
)

TICKET_TYPES = ["problem", "incident", "question", "task"]
PRIORITIES = ["urgent", "high", "normal", "low"]
STATUSES = ["new", "open", "pending", "hold", "solved", "closed"]

_TICKET_ID = {"ticket_id": id_property("Ticket ID")}
_TAGS = {"type": "array", "items": {"type": "string"}}


def _comment_schema(description: str, *, require_body: bool) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "type": "object",
        "description": description,
        "properties": {
            "body": {"type": "string", "description": "Comment body"},
            "public": {
                "type": "boolean",
                "description": "Whether comment is public",
                "default": True,
            },
        },
    }
    if require_body:
        schema["required"] = ["body"]
    return schema


_COMMON_FIELDS: Dict[str, Any] = {
    "subject": {"type": "string", "description": "Ticket subject"},
    "assignee_id": id_property("Assignee user ID"),
    "group_id": id_property("Group ID"),
    "type": {"type": "string", "enum": TICKET_TYPES, "description": "Ticket type"},
    "priority": {"type": "string", "enum": PRIORITIES, "description": "Ticket priority"},
    "status": {"type": "string", "enum": STATUSES, "description": "Ticket status"},
    "custom_fields": {"type": "array", "description": "Custom field values"},
    "due_at": {"type": "string", "description": "Due date (ISO 8601)"},
}


def build_ticket_body(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create payload. ``requester_email``/``requester_name`` become a nested
    ``requester`` object unless an explicit ``requester_id`` is given.
    """
    ticket = dict(args)
    if ticket.get("requester_email") and not ticket.get("requester_id"):
        ticket["requester"] = drop_none(
            {
                "email": ticket.pop("requester_email"),
                "name": ticket.pop("requester_name", None),
            }
        )
    return ticket


TICKETS = ResourceSpec(
    singular="ticket",
    plural="tickets",
    path="/tickets",
    label="ticket",
    list_properties={
        "page_size": {
            "type": "number",
            "description": "Number of results per page (max 100)",
            "default": 100,
        },
        "sort_by": {
            "type": "string",
            "enum": ["created_at", "updated_at", "priority", "status", "ticket_type"],
            "description": "Field to sort by",
        },
        "sort_order": {"type": "string", "enum": ["asc", "desc"], "description": "Sort order"},
    },
    create_properties={
        **_COMMON_FIELDS,
        "comment": _comment_schema("Initial comment", require_body=True),
        "requester_id": id_property("Requester user ID"),
        "requester_email": {
            "type": "string",
            "description": "Requester email (alternative to requester_id)",
        },
        "requester_name": {"type": "string", "description": "Requester name (used with email)"},
        "tags": {**_TAGS, "description": "Tags"},
        "external_id": {"type": "string", "description": "External ID for tracking"},
        "brand_id": id_property("Brand ID"),
        "ticket_form_id": id_property("Ticket form ID"),
    },
    create_required=("comment",),
    update_properties={
        **_COMMON_FIELDS,
        "comment": _comment_schema("Add a comment", require_body=False),
        "tags": {**_TAGS, "description": "Tags (replaces existing)"},
    },
    create_body=build_ticket_body,
    descriptions={"list": "List tickets with optional filtering and pagination"},
)


async def bulk_update_tickets(client: ZendeskClient, args: Dict[str, Any]) -> Any:
    ticket_ids = required_arg(args, "ticket_ids")
    update = {k: v for k, v in args.items() if k != "ticket_ids"}
    response = await client.put(
        "/tickets/update_many.json", {"ticket": {**update, "ids": ticket_ids}}
    )
    return response.get("job_status")


async def merge_tickets(client: ZendeskClient, args: Dict[str, Any]) -> Any:
    target = format_id(required_arg(args, "target_ticket_id"))
    body = drop_none(
        {
            "ids": required_arg(args, "source_ticket_ids"),
            "target_comment": args.get("target_comment"),
            "source_comment": args.get("source_comment"),
        }
    )
    return await client.post(f"/tickets/{target}/merge.json", body)


async def _put_ticket(client: ZendeskClient, args: Dict[str, Any], ticket: Dict[str, Any]) -> Any:
    ticket_id = format_id(required_arg(args, "ticket_id"))
    response = await client.put(f"/tickets/{ticket_id}.json", {"ticket": ticket})
    return response.get("ticket")


async def add_ticket_tags(client: ZendeskClient, args: Dict[str, Any]) -> Any:
    return await _put_ticket(client, args, {"additional_tags": required_arg(args, "tags")})


async def remove_ticket_tags(client: ZendeskClient, args: Dict[str, Any]) -> Any:
    return await _put_ticket(client, args, {"remove_tags": required_arg(args, "tags")})


async def add_ticket_comment(client: ZendeskClient, args: Dict[str, Any]) -> Any:
    public = args.get("public")
    comment = drop_none(
        {
            "body": required_arg(args, "body"),
            "public": True if public is None else public,
            "author_id": args.get("author_id"),
        }
    )
    return await _put_ticket(client, args, {"comment": comment})


async def list_ticket_comments(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    ticket_id = format_id(required_arg(args, "ticket_id"))
    comments = await client.paginate_all(
        f"/tickets/{ticket_id}/comments.json",
        {"sort_order": args.get("sort_order")},
        "comments",
    )
    return list_result("comments", comments)


async def list_ticket_forms(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
    forms = await client.paginate_all(
        "/ticket_forms.json", {"active": args.get("active")}, "ticket_forms"
    )
    return list_result("ticket_forms", forms)


async def get_ticket_form(client: ZendeskClient, args: Dict[str, Any]) -> Any:
    form_id = format_id(required_arg(args, "form_id"))
    response = await client.get(f"/ticket_forms/{form_id}.json")
    return response.get("ticket_form")


async def get_ticket_satisfaction_rating(
    client: ZendeskClient, args: Dict[str, Any]
) -> Dict[str, Any]:
    ticket_id = format_id(required_arg(args, "ticket_id"))
    response = await client.get(f"/tickets/{ticket_id}.json")
    ticket = response.get("ticket") or {}
    return {"satisfaction_rating": ticket.get("satisfaction_rating") or None}


def tools() -> List[ToolSpec]:
    return [
        *crud_tools(TICKETS),
        ToolSpec(
            name="zendesk_bulk_update_tickets",
            description="Update multiple tickets at once",
            input_schema=object_schema(
                {
                    "ticket_ids": {
                        "type": "array",
                        "items": {"type": "number"},
                        "description": "Array of ticket IDs",
                    },
                    "status": {"type": "string", "enum": STATUSES, "description": "Update status"},
                    "assignee_id": id_property("Assignee user ID"),
                    "group_id": id_property("Group ID"),
                    "priority": {"type": "string", "enum": PRIORITIES, "description": "Priority"},
                    "type": {"type": "string", "enum": TICKET_TYPES, "description": "Ticket type"},
                    "add_tags": {**_TAGS, "description": "Tags to add"},
                    "remove_tags": {**_TAGS, "description": "Tags to remove"},
                },
                required=["ticket_ids"],
            ),
            handler=bulk_update_tickets,
        ),
        ToolSpec(
            name="zendesk_merge_tickets",
            description="Merge one or more tickets into a target ticket",
            input_schema=object_schema(
                {
                    "target_ticket_id": id_property("Target ticket ID to merge into"),
                    "source_ticket_ids": {
                        "type": "array",
                        "items": {"type": "number"},
                        "description": "Source ticket IDs to merge",
                    },
                    "target_comment": {
                        "type": "string",
                        "description": "Comment to add to target ticket",
                    },
                    "source_comment": {
                        "type": "string",
                        "description": "Comment to add to source tickets",
                    },
                },
                required=["target_ticket_id", "source_ticket_ids"],
            ),
            handler=merge_tickets,
        ),
        ToolSpec(
            name="zendesk_add_ticket_tags",
            description="Add tags to a ticket",
            input_schema=object_schema(
                {**_TICKET_ID, "tags": {**_TAGS, "description": "Tags to add"}},
                required=["ticket_id", "tags"],
            ),
            handler=add_ticket_tags,
        ),
        ToolSpec(
            name="zendesk_remove_ticket_tags",
            description="Remove tags from a ticket",
            input_schema=object_schema(
                {**_TICKET_ID, "tags": {**_TAGS, "description": "Tags to remove"}},
                required=["ticket_id", "tags"],
            ),
            handler=remove_ticket_tags,
        ),
        ToolSpec(
            name="zendesk_add_ticket_comment",
            description="Add a comment to a ticket",
            input_schema=object_schema(
                {
                    **_TICKET_ID,
                    "body": {"type": "string", "description": "Comment body"},
                    "public": {
                        "type": "boolean",
                        "description": "Whether comment is public",
                        "default": True,
                    },
                    "author_id": id_property(
                        "Author user ID (if different from authenticated user)"
                    ),
                },
                required=["ticket_id", "body"],
            ),
            handler=add_ticket_comment,
        ),
        ToolSpec(
            name="zendesk_list_ticket_comments",
            description="List all comments for a ticket",
            input_schema=object_schema(
                {
                    **_TICKET_ID,
                    "sort_order": {
                        "type": "string",
                        "enum": ["asc", "desc"],
                        "description": "Sort order (asc = oldest first, desc = newest first)",
                    },
                },
                required=["ticket_id"],
            ),
            handler=list_ticket_comments,
        ),
        ToolSpec(
            name="zendesk_list_ticket_forms",
            description="List all ticket forms",
            input_schema=object_schema(
                {"active": {"type": "boolean", "description": "Filter by active status"}}
            ),
            handler=list_ticket_forms,
        ),
        ToolSpec(
            name="zendesk_get_ticket_form",
            description="Get a single ticket form by ID",
            input_schema=object_schema(
                {"form_id": id_property("Ticket form ID")}, required=["form_id"]
            ),
            handler=get_ticket_form,
        ),
        ToolSpec(
            name="zendesk_get_ticket_satisfaction_rating",
            description="Get the satisfaction rating for a ticket",
            input_schema=object_schema(_TICKET_ID, required=["ticket_id"]),
            handler=get_ticket_satisfaction_rating,
        ),
    ]
