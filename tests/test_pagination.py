import logging

import pytest
import respx
from httpx import Response
from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.pagination import (
    DEFAULT_PAGE_SIZE,
    first_array_key,
    next_page,
    resolve_page_size,
)

BASE = "https://acme.zendesk.com/api/v2"


@pytest.fixture
def client():
    return ZendeskClient("acme", email="agent@acme.test", api_token="tok")


def _query(call):
    return dict(call.request.url.params.multi_items())


def test_first_array_key_picks_first_list():
    assert first_array_key({"count": 2, "users": [], "groups": []}) == "users"
    assert first_array_key({"meta": {}}) is None


@pytest.mark.parametrize(
    "params, expected",
    [
        (None, DEFAULT_PAGE_SIZE),
        ({}, DEFAULT_PAGE_SIZE),
        ({"page_size": 0}, DEFAULT_PAGE_SIZE),
        ({"page_size": 25}, 25),
    ],
)
def test_resolve_page_size(params, expected):
    assert resolve_page_size(params) == expected


def test_next_page_prefers_cursor_over_links():
    payload = {
        "meta": {"has_more": True, "after_cursor": "c2", "after_url": "https://x/legacy"},
        "links": {"next": "https://x/next"},
    }
    step = next_page(payload, {"sort_order": "asc"}, 50)
    assert step == (None, {"sort_order": "asc", "page_size": 50, "cursor": "c2"})


def test_next_page_link_before_legacy():
    payload = {
        "meta": {"after_url": "https://x/legacy"},
        "links": {"next": "https://x/next?page=2"},
    }
    assert next_page(payload, {}, 100) == ("https://x/next?page=2", {})


def test_next_page_legacy_after_url():
    assert next_page({"meta": {"after_url": "https://x/legacy"}}, {}, 100) == (
        "https://x/legacy",
        {},
    )


def test_next_page_none_when_done():
    assert next_page({"meta": {"has_more": False}}, {}, 100) is None
    assert next_page({}, {}, 100) is None


def test_next_page_tolerates_malformed_meta():
    assert next_page({"meta": "bogus", "links": ["x"]}, {}, 100) is None


def test_has_more_without_continuation_logs_truncation(caplog):
    caplog.set_level(logging.WARNING, logger="zendesk_mcp.core.pagination")
    assert next_page({"meta": {"has_more": True}}, {}, 100, path="/tickets.json") is None

    record = next(r for r in caplog.records if r.getMessage() == "pagination_truncated")
    assert record.levelno == logging.WARNING
    assert record.endpoint == "/tickets.json"


@pytest.mark.asyncio
@respx.mock
async def test_cursor_pagination_carries_base_params(client):
    route = respx.get(f"{BASE}/tickets.json").mock(
        side_effect=[
            Response(
                200,
                json={
                    "tickets": [{"id": 1}, {"id": 2}],
                    "meta": {"has_more": True, "after_cursor": "abc"},
                },
            ),
            Response(
                200,
                json={"tickets": [{"id": 3}], "meta": {"has_more": False}},
            ),
        ]
    )

    async with client:
        items = await client.paginate_all(
            "/tickets.json", {"sort_order": "desc"}, "tickets"
        )

    assert [t["id"] for t in items] == [1, 2, 3]
    assert route.call_count == 2
    first, second = route.calls
    assert _query(first) == {"sort_order": "desc", "page_size": "100"}
    assert _query(second) == {"sort_order": "desc", "page_size": "100", "cursor": "abc"}


def _cursor_pages(key):
    return [
        Response(200, json={key: [{"id": 1}], "meta": {"has_more": True, "after_cursor": "a"}}),
        Response(200, json={key: [{"id": 2}], "meta": {"has_more": True, "after_cursor": "b"}}),
        Response(200, json={key: [{"id": 3}], "meta": {"has_more": False}}),
    ]


@pytest.mark.asyncio
@respx.mock
async def test_cursor_only_latest_cursor_is_sent(client):
    route = respx.get(f"{BASE}/tickets.json").mock(side_effect=_cursor_pages("tickets"))

    async with client:
        items = await client.paginate_all("/tickets.json", {"sort_by": "id"}, "tickets")

    assert [t["id"] for t in items] == [1, 2, 3]
    assert [_query(c) for c in route.calls] == [
        {"sort_by": "id", "page_size": "100"},
        {"sort_by": "id", "page_size": "100", "cursor": "a"},
        {"sort_by": "id", "page_size": "100", "cursor": "b"},
    ]
    assert route.calls[2].request.url.params.get_list("cursor") == ["b"]


@pytest.mark.asyncio
@respx.mock
async def test_caller_cursor_replaced_by_server_cursor(client):
    route = respx.get(f"{BASE}/users.json").mock(side_effect=_cursor_pages("users"))

    async with client:
        await client.paginate_all("/users.json", {"cursor": "start"}, "users")

    cursors = [c.request.url.params.get_list("cursor") for c in route.calls]
    assert cursors == [["start"], ["a"], ["b"]]


@pytest.mark.asyncio
@respx.mock
async def test_explicit_page_size_is_reused(client):
    route = respx.get(f"{BASE}/users.json").mock(
        side_effect=[
            Response(
                200,
                json={"users": [{"id": 1}], "meta": {"has_more": True, "after_cursor": "n"}},
            ),
            Response(200, json={"users": [{"id": 2}], "meta": {"has_more": False}}),
        ]
    )

    async with client:
        await client.paginate_all("/users.json", {"page_size": 1}, "users")

    assert [_query(c)["page_size"] for c in route.calls] == ["1", "1"]


@pytest.mark.asyncio
@respx.mock
async def test_link_pagination_follows_next_url_verbatim(client):
    next_url = "https://acme.zendesk.com/api/v2/views/3/tickets.json?page=2"
    first = respx.get(f"{BASE}/views/3/tickets.json", params={"page_size": "100"}).mock(
        return_value=Response(
            200, json={"tickets": [{"id": 1}], "links": {"next": next_url}}
        )
    )
    second = respx.get(next_url).mock(
        return_value=Response(200, json={"tickets": [{"id": 2}], "links": {"next": None}})
    )

    async with client:
        items = await client.paginate_all("/views/3/tickets.json", {}, "tickets")

    assert [t["id"] for t in items] == [1, 2]
    assert first.call_count == 1
    assert second.call_count == 1
    # No params are merged into the link URL.
    assert _query(second.calls.last) == {"page": "2"}


@pytest.mark.asyncio
@respx.mock
async def test_legacy_after_url_pagination(client):
    legacy = "https://acme.zendesk.com/api/v2/tags.json?page=2"
    respx.get(legacy).mock(return_value=Response(200, json={"tags": [{"name": "b"}]}))
    respx.get(f"{BASE}/tags.json", params={"page_size": "100"}).mock(
        return_value=Response(
            200, json={"tags": [{"name": "a"}], "meta": {"after_url": legacy}}
        )
    )

    async with client:
        items = await client.paginate_all("/tags.json", {}, "tags")

    assert [t["name"] for t in items] == ["a", "b"]


@pytest.mark.asyncio
@respx.mock
async def test_empty_page_stops_iteration(client):
    route = respx.get(f"{BASE}/groups.json").mock(
        return_value=Response(
            200,
            json={"groups": [], "meta": {"has_more": True, "after_cursor": "never"}},
        )
    )

    async with client:
        items = await client.paginate_all("/groups.json", {}, "groups")

    assert items == []
    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_missing_resource_key_stops_iteration(client):
    respx.get(f"{BASE}/brands.json").mock(return_value=Response(200, json={"count": 0}))

    async with client:
        assert await client.paginate_all("/brands.json", {}, "brands") == []


@pytest.mark.asyncio
@respx.mock
async def test_resource_key_inferred_from_first_array(client):
    respx.get(f"{BASE}/macros.json").mock(
        return_value=Response(200, json={"count": 1, "macros": [{"id": 4}]})
    )

    async with client:
        items = [m async for m in client.paginate("/macros.json")]

    assert items == [{"id": 4}]
