import json
import logging
from types import ModuleType

import pytest
import respx
from httpx import Response
from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.registry import (
    ToolRegistry,
    ToolSpec,
    build_registry,
    discover_tool_modules,
    iter_tool_specs,
)

BASE = "https://acme.zendesk.com/api/v2"


def _client():
    return ZendeskClient("acme", email="agent@acme.test", api_token="tok")


def _make_module(name: str, specs) -> ModuleType:
    module = ModuleType(name)
    if specs is not None:
        module.tools = lambda: list(specs)
    return module


async def _echo(client, args):
    return {"base_url": client.base_url, "args": args}


async def _boom(client, args):
    raise RuntimeError("kaboom")


def test_duplicate_names_raise():
    spec = ToolSpec("zendesk_echo", "Echo", handler=_echo)
    mod1 = _make_module("mod1", [spec])
    mod2 = _make_module("mod2", [spec])

    with pytest.raises(ValueError, match="zendesk_echo"):
        build_registry(_client(), modules=[mod1, mod2])


def test_modules_without_tools_factory_are_skipped():
    registry = build_registry(
        _client(),
        modules=[
            _make_module("helpers", None),
            _make_module("real", [ToolSpec("zendesk_echo", "Echo", handler=_echo)]),
        ],
    )
    assert registry.names == ["zendesk_echo"]


def test_specs_without_handler_are_skipped():
    module = _make_module(
        "partial",
        [ToolSpec("zendesk_stub", "Stub"), ToolSpec("zendesk_echo", "Echo", handler=_echo)],
    )
    assert [s.name for s in iter_tool_specs(module)] == ["zendesk_echo"]


def test_list_tools_exposes_schema():
    schema = {"type": "object", "properties": {"x": {"type": "number"}}, "required": ["x"]}
    registry = ToolRegistry(_client(), [ToolSpec("zendesk_echo", "Echo", schema, _echo)])

    (tool,) = registry.list_tools()
    assert tool.name == "zendesk_echo"
    assert tool.description == "Echo"
    assert tool.inputSchema == schema


@pytest.mark.asyncio
async def test_call_success_returns_pretty_json():
    registry = ToolRegistry(_client(), [ToolSpec("zendesk_echo", "Echo", handler=_echo)])

    result = await registry.call("zendesk_echo", {"name": "Überprüfung"})

    assert result.isError is False
    text = result.content[0].text
    assert json.loads(text) == {"base_url": BASE, "args": {"name": "Überprüfung"}}
    assert "Überprüfung" in text
    assert text.startswith("{\n  ")


@pytest.mark.asyncio
async def test_call_none_arguments_become_empty_dict():
    registry = ToolRegistry(_client(), [ToolSpec("zendesk_echo", "Echo", handler=_echo)])
    result = await registry.call("zendesk_echo", None)
    assert json.loads(result.content[0].text)["args"] == {}


@pytest.mark.asyncio
async def test_unknown_tool_returns_error_result():
    registry = ToolRegistry(_client())

    result = await registry.call("zendesk_nope", {})

    assert result.isError is True
    assert result.content[0].text == "Error: Unknown tool: zendesk_nope"


@pytest.mark.asyncio
async def test_handler_exception_becomes_error_result(caplog):
    registry = ToolRegistry(_client(), [ToolSpec("zendesk_boom", "Boom", handler=_boom)])

    with caplog.at_level(logging.INFO, logger="zendesk_mcp.core.registry"):
        result = await registry.call("zendesk_boom", {})

    assert result.isError is True
    assert result.content[0].text == "Error: kaboom"
    record = next(r for r in caplog.records if r.getMessage() == "tool_call")
    assert record.tool == "zendesk_boom"
    assert record.status == "error"
    assert record.error_type == "RuntimeError"


@pytest.mark.asyncio
@respx.mock
async def test_http_error_surfaces_zendesk_message():
    respx.get(f"{BASE}/tickets/1.json").mock(
        return_value=Response(404, json={"error": "RecordNotFound", "description": "Not found"})
    )
    registry = build_registry(_client())

    result = await registry.call("zendesk_get_ticket", {"ticket_id": 1})

    assert result.isError is True
    assert result.content[0].text == "Error: RecordNotFound: Not found"


@pytest.mark.asyncio
async def test_client_provider_error_is_reported_per_call():
    def provider():
        raise ValueError("ZENDESK_SUBDOMAIN environment variable is required")

    registry = ToolRegistry(provider, [ToolSpec("zendesk_echo", "Echo", handler=_echo)])
    result = await registry.call("zendesk_echo", {})

    assert result.isError is True
    assert "ZENDESK_SUBDOMAIN" in result.content[0].text


def test_discovery_finds_every_tool_module():
    modules = discover_tool_modules()
    names = {m.__name__.rsplit(".", 1)[-1] for m in modules}
    assert {"tickets", "users", "organizations", "views", "sla", "system"} <= names


def test_full_catalogue_has_unique_names():
    registry = build_registry(_client())
    names = registry.names

    assert len(names) == len(set(names))
    assert all(n.startswith("zendesk_") for n in names)
    for expected in (
        "zendesk_list_tickets",
        "zendesk_get_ticket",
        "zendesk_create_ticket",
        "zendesk_update_ticket",
        "zendesk_delete_ticket",
        "zendesk_bulk_update_tickets",
        "zendesk_merge_tickets",
        "zendesk_add_ticket_comment",
        "zendesk_get_ticket_satisfaction_rating",
        "zendesk_search_users",
        "zendesk_merge_users",
        "zendesk_search_organizations",
        "zendesk_list_group_memberships",
        "zendesk_execute_view",
        "zendesk_count_view",
        "zendesk_apply_macro",
        "zendesk_reorder_triggers",
        "zendesk_list_automations",
        "zendesk_list_sla_policies",
        "zendesk_get_sla_policy",
        "zendesk_list_brands",
        "zendesk_search",
        "zendesk_search_tickets",
        "zendesk_get_satisfaction_rating",
        "zendesk_recover_suspended_ticket",
        "zendesk_autocomplete_tags",
        "zendesk_create_ticket_field",
        "zendesk_list_user_fields",
        "zendesk_list_organization_fields",
        "zendesk_system_ping",
    ):
        assert expected in names, expected


def test_every_tool_schema_is_an_object():
    registry = build_registry(_client())
    for tool in registry.list_tools():
        assert tool.inputSchema["type"] == "object", tool.name
        for required in tool.inputSchema.get("required", []):
            assert required in tool.inputSchema["properties"], tool.name
