import asyncio

import anyio
import pytest
from zendesk_mcp.core.context import (
    current_request_id,
    current_tool,
    ensure_request_id,
    request_scope,
    tool_scope,
)


def test_ensure_request_id_keeps_candidate():
    assert ensure_request_id("abc") == "abc"


def test_ensure_request_id_generates_hex():
    rid = ensure_request_id(None)
    assert len(rid) == 32
    int(rid, 16)


def test_scopes_reset_on_exit():
    assert current_request_id() is None
    with request_scope("rid-1") as rid, tool_scope("zendesk_get_ticket"):
        assert rid == "rid-1"
        assert current_request_id() == "rid-1"
        assert current_tool() == "zendesk_get_ticket"
    assert current_request_id() is None
    assert current_tool() is None


def test_scope_reset_after_exception():
    with pytest.raises(RuntimeError):
        with tool_scope("zendesk_boom"):
            raise RuntimeError("x")
    assert current_tool() is None


@pytest.mark.asyncio
async def test_concurrent_scopes_are_isolated():
    async def worker(rid: str):
        with request_scope(rid):
            await anyio.sleep(0)
            return current_request_id()

    results = await asyncio.gather(worker("a"), worker("b"))
    assert results == ["a", "b"]
