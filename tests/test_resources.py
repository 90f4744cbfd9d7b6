import json

import pytest
import respx
from httpx import Response
from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.resources import (
    ResourceSpec,
    conditions_body,
    crud_tools,
    format_id,
    split_id,
)

BASE = "https://acme.zendesk.com/api/v2"

WIDGETS = ResourceSpec(
    singular="widget",
    plural="widgets",
    path="/widgets",
    label="widget",
    list_properties={"active": {"type": "boolean"}},
    create_properties={"name": {"type": "string"}},
    create_required=("name",),
    update_properties={"name": {"type": "string"}},
)


@pytest.fixture
def client():
    return ZendeskClient("acme", email="agent@acme.test", api_token="tok")


def _tools(spec=WIDGETS):
    return {t.name: t for t in crud_tools(spec)}


@pytest.mark.parametrize(
    "value, expected",
    [(42, "42"), (42.0, "42"), ("abc", "abc"), (1.5, "1.5")],
)
def test_format_id(value, expected):
    assert format_id(value) == expected


def test_split_id_requires_id():
    with pytest.raises(ValueError, match="widget_id is required"):
        split_id({"name": "x"}, "widget_id")


def test_conditions_body_only_includes_supplied_groups():
    assert conditions_body({}) is None
    assert conditions_body({"all_conditions": [1]}) == {"all": [1]}
    assert conditions_body({"all_conditions": [1], "any_conditions": [2]}) == {
        "all": [1],
        "any": [2],
    }


def test_crud_tool_names_and_schemas():
    tools = _tools()
    assert list(tools) == [
        "zendesk_list_widgets",
        "zendesk_get_widget",
        "zendesk_create_widget",
        "zendesk_update_widget",
        "zendesk_delete_widget",
    ]
    assert tools["zendesk_get_widget"].input_schema == {
        "type": "object",
        "properties": {"widget_id": {"type": "number", "description": "Widget ID"}},
        "required": ["widget_id"],
    }
    assert tools["zendesk_create_widget"].input_schema["required"] == ["name"]
    update = tools["zendesk_update_widget"].input_schema
    assert list(update["properties"]) == ["widget_id", "name"]
    assert update["required"] == ["widget_id"]


def test_operations_subset_and_unknown_operation():
    spec = ResourceSpec("gadget", "gadgets", "/gadgets", "gadget", operations=("list",))
    assert [t.name for t in crud_tools(spec)] == ["zendesk_list_gadgets"]

    bad = ResourceSpec("gadget", "gadgets", "/gadgets", "gadget", operations=("explode",))
    with pytest.raises(ValueError):
        crud_tools(bad)


@pytest.mark.asyncio
@respx.mock
async def test_list_filters_unknown_args_and_counts(client):
    route = respx.get(f"{BASE}/widgets.json").mock(
        return_value=Response(200, json={"widgets": [{"id": 1}, {"id": 2}]})
    )

    async with client:
        result = await _tools()["zendesk_list_widgets"].handler(
            client, {"active": False, "bogus": "x"}
        )

    assert result == {"widgets": [{"id": 1}, {"id": 2}], "count": 2}
    assert dict(route.calls.last.request.url.params) == {
        "active": "false",
        "page_size": "100",
    }


@pytest.mark.asyncio
@respx.mock
async def test_get_unwraps_singular_key(client):
    respx.get(f"{BASE}/widgets/7.json").mock(
        return_value=Response(200, json={"widget": {"id": 7, "name": "W"}})
    )

    async with client:
        result = await _tools()["zendesk_get_widget"].handler(client, {"widget_id": 7.0})

    assert result == {"id": 7, "name": "W"}


@pytest.mark.asyncio
@respx.mock
async def test_create_wraps_body(client):
    route = respx.post(f"{BASE}/widgets.json").mock(
        return_value=Response(201, json={"widget": {"id": 3, "name": "new"}})
    )

    async with client:
        result = await _tools()["zendesk_create_widget"].handler(client, {"name": "new"})

    assert result == {"id": 3, "name": "new"}
    assert json.loads(route.calls.last.request.content) == {"widget": {"name": "new"}}


@pytest.mark.asyncio
@respx.mock
async def test_update_strips_id_from_body(client):
    route = respx.put(f"{BASE}/widgets/3.json").mock(
        return_value=Response(200, json={"widget": {"id": 3, "name": "renamed"}})
    )

    async with client:
        await _tools()["zendesk_update_widget"].handler(
            client, {"widget_id": 3, "name": "renamed"}
        )

    assert json.loads(route.calls.last.request.content) == {"widget": {"name": "renamed"}}


@pytest.mark.asyncio
@respx.mock
async def test_delete_echoes_raw_id(client):
    respx.delete(f"{BASE}/widgets/3.json").mock(return_value=Response(204))

    async with client:
        result = await _tools()["zendesk_delete_widget"].handler(client, {"widget_id": 3})

    assert result == {"success": True, "widget_id": 3}


@pytest.mark.asyncio
async def test_missing_id_raises_before_any_request(client):
    async with client:
        with pytest.raises(ValueError, match="widget_id is required"):
            await _tools()["zendesk_get_widget"].handler(client, {})
