"""
Declarative CRUD tools for Zendesk resources.

Most Zendesk resources follow the same REST shape:

    GET    /{plural}.json            -> {"<plural>": [...], "meta"/"links"...}
    GET    /{plural}/{id}.json       -> {"<singular>": {...}}
    POST   /{plural}.json            body {"<singular>": {...}}
    PUT    /{plural}/{id}.json       body {"<singular>": {...}}
    DELETE /{plural}/{id}.json       -> 204

A ResourceSpec describes one resource; ``crud_tools`` turns it into ToolSpecs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .client import ZendeskClient
from .registry import ToolSpec

Body = Dict[str, Any]
BodyBuilder = Callable[[Dict[str, Any]], Body]

ALL_OPERATIONS = ("list", "get", "create", "update", "delete")


def object_schema(
    properties: Optional[Mapping[str, Any]] = None,
    required: Sequence[str] = (),
) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "object", "properties": dict(properties or {})}
    if required:
        schema["required"] = list(required)
    return schema


def id_property(description: str) -> Dict[str, Any]:
    return {"type": "number", "description": description}


def required_arg(args: Mapping[str, Any], name: str) -> Any:
    value = args.get(name)
    if value is None:
        raise ValueError(f"{name} is required")
    return value


def format_id(value: Any) -> str:
    # JSON numbers arrive as floats (42.0) from some hosts.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def drop_none(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def split_id(args: Mapping[str, Any], id_arg: str) -> Tuple[str, Dict[str, Any]]:
    item_id = format_id(required_arg(args, id_arg))
    rest = {k: v for k, v in args.items() if k != id_arg}
    return item_id, rest


def conditions_body(
    args: Mapping[str, Any], *, all_key: str = "all_conditions", any_key: str = "any_conditions"
) -> Optional[Dict[str, Any]]:
    """Fold flat ``all_conditions``/``any_conditions`` args into ``conditions``."""
    all_conditions = args.get(all_key)
    any_conditions = args.get(any_key)
    if not all_conditions and not any_conditions:
        return None
    conditions: Dict[str, Any] = {}
    if all_conditions:
        conditions["all"] = all_conditions
    if any_conditions:
        conditions["any"] = any_conditions
    return conditions


def list_result(key: str, items: List[Any]) -> Dict[str, Any]:
    return {key: items, "count": len(items)}


@dataclass(frozen=True)
class ResourceSpec:
    singular: str
    plural: str
    path: str
    label: str
    id_name: Optional[str] = None
    id_description: Optional[str] = None
    operations: Tuple[str, ...] = ALL_OPERATIONS
    list_properties: Mapping[str, Any] = field(default_factory=dict)
    create_properties: Mapping[str, Any] = field(default_factory=dict)
    create_required: Tuple[str, ...] = ()
    update_properties: Mapping[str, Any] = field(default_factory=dict)
    create_body: Optional[BodyBuilder] = None
    update_body: Optional[BodyBuilder] = None
    descriptions: Mapping[str, str] = field(default_factory=dict)

    @property
    def id_arg(self) -> str:
        return self.id_name or f"{self.singular}_id"

    def id_schema(self) -> Dict[str, Any]:
        label = self.label[:1].upper() + self.label[1:]
        return {self.id_arg: id_property(self.id_description or f"{label} ID")}

    @property
    def collection_path(self) -> str:
        return f"{self.path}.json"

    def item_path(self, item_id: str) -> str:
        return f"{self.path}/{item_id}.json"

    def tool_name(self, operation: str) -> str:
        if operation == "list":
            return f"zendesk_list_{self.plural}"
        return f"zendesk_{operation}_{self.singular}"

    def describe(self, operation: str) -> str:
        if operation in self.descriptions:
            return self.descriptions[operation]
        defaults = {
            "list": f"List all {self.label}s",
            "get": f"Get a single {self.label} by ID",
            "create": f"Create a new {self.label}",
            "update": f"Update an existing {self.label}",
            "delete": f"Delete a {self.label}",
        }
        return defaults[operation]


def _list_tool(spec: ResourceSpec) -> ToolSpec:
    async def handler(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
        params = {k: v for k, v in args.items() if k in spec.list_properties}
        items = await client.paginate_all(spec.collection_path, params, spec.plural)
        return list_result(spec.plural, items)

    return ToolSpec(
        name=spec.tool_name("list"),
        description=spec.describe("list"),
        input_schema=object_schema(spec.list_properties),
        handler=handler,
    )


def _get_tool(spec: ResourceSpec) -> ToolSpec:
    async def handler(client: ZendeskClient, args: Dict[str, Any]) -> Any:
        item_id = format_id(required_arg(args, spec.id_arg))
        response = await client.get(spec.item_path(item_id))
        return response.get(spec.singular)

    return ToolSpec(
        name=spec.tool_name("get"),
        description=spec.describe("get"),
        input_schema=object_schema(
            spec.id_schema(),
            required=[spec.id_arg],
        ),
        handler=handler,
    )


def _create_tool(spec: ResourceSpec) -> ToolSpec:
    async def handler(client: ZendeskClient, args: Dict[str, Any]) -> Any:
        body = spec.create_body(args) if spec.create_body else dict(args)
        response = await client.post(spec.collection_path, {spec.singular: body})
        return response.get(spec.singular)

    return ToolSpec(
        name=spec.tool_name("create"),
        description=spec.describe("create"),
        input_schema=object_schema(spec.create_properties, spec.create_required),
        handler=handler,
    )


def _update_tool(spec: ResourceSpec) -> ToolSpec:
    async def handler(client: ZendeskClient, args: Dict[str, Any]) -> Any:
        item_id, data = split_id(args, spec.id_arg)
        body = spec.update_body(data) if spec.update_body else data
        response = await client.put(spec.item_path(item_id), {spec.singular: body})
        return response.get(spec.singular)

    properties = {**spec.id_schema(), **spec.update_properties}
    return ToolSpec(
        name=spec.tool_name("update"),
        description=spec.describe("update"),
        input_schema=object_schema(properties, required=[spec.id_arg]),
        handler=handler,
    )


def _delete_tool(spec: ResourceSpec) -> ToolSpec:
    async def handler(client: ZendeskClient, args: Dict[str, Any]) -> Dict[str, Any]:
        raw_id = required_arg(args, spec.id_arg)
        await client.delete(spec.item_path(format_id(raw_id)))
        return {"success": True, spec.id_arg: raw_id}

    return ToolSpec(
        name=spec.tool_name("delete"),
        description=spec.describe("delete"),
        input_schema=object_schema(
            spec.id_schema(),
            required=[spec.id_arg],
        ),
        handler=handler,
    )


_BUILDERS = {
    "list": _list_tool,
    "get": _get_tool,
    "create": _create_tool,
    "update": _update_tool,
    "delete": _delete_tool,
}


def crud_tools(spec: ResourceSpec) -> List[ToolSpec]:
    unknown = set(spec.operations) - set(_BUILDERS)
    if unknown:
        raise ValueError(f"Unknown operations for {spec.plural}: {sorted(unknown)}")
    return [_BUILDERS[op](spec) for op in spec.operations]


__all__ = [
    "ResourceSpec",
    "crud_tools",
    "object_schema",
    "id_property",
    "required_arg",
    "format_id",
    "drop_none",
    "split_id",
    "conditions_body",
    "list_result",
]
