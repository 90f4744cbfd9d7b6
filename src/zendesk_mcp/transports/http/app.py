from __future__ import annotations

import contextlib
import logging
from typing import Callable, Dict, Optional

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route

from zendesk_mcp.core.client import ZendeskClient
from zendesk_mcp.core.config import LazyClientProvider, load_env_config
from zendesk_mcp.core.registry import build_registry
from zendesk_mcp.server import create_server
from zendesk_mcp.transports.http.config import HttpConfig
from zendesk_mcp.transports.http.ops import (
    build_readiness_status,
    compute_readiness_state,
    is_ops_path,
)
from zendesk_mcp.transports.http.request_id_middleware import RequestIdMiddleware

log = logging.getLogger(__name__)


class StreamableHTTPEndpoint:
    """ASGI endpoint handing MCP traffic to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope, receive, send):
        await self.session_manager.handle_request(scope, receive, send)


def build_session_manager(
    cfg: HttpConfig,
    client_provider: Callable[[], ZendeskClient],
) -> StreamableHTTPSessionManager:
    """Create the MCP server with all discovered tools behind a session manager."""
    registry = build_registry(client_provider)
    server = create_server(registry)
    log.info(
        "Built MCP session manager (json_response=%s, stateless_http=%s, path=%s)",
        cfg.json_response,
        cfg.stateless_http,
        cfg.path,
    )
    return StreamableHTTPSessionManager(
        app=server,
        json_response=cfg.json_response,
        stateless=cfg.stateless_http,
    )


def _build_ops_app(readiness_state: Dict[str, bool]) -> Starlette:
    async def healthz(_request):
        return JSONResponse({"status": "ok"}, headers={"Cache-Control": "no-store"})

    async def readyz(_request):
        payload = build_readiness_status(readiness_state)
        status_code = 200 if payload["status"] == "ok" else 503
        return JSONResponse(
            payload,
            status_code=status_code,
            headers={"Cache-Control": "no-store"},
        )

    ops_app = Starlette()
    ops_app.add_route("/healthz", healthz, methods=["GET"])
    ops_app.add_route("/readyz", readyz, methods=["GET"])
    return ops_app


class OpsDispatcher:
    """
    ASGI wrapper that routes ops endpoints to a minimal app and everything else
    to the main app. Exposes router/state so lifespan-driven clients keep working.
    """

    def __init__(self, ops_app, main_app):
        self.ops_app = ops_app
        self.main_app = main_app
        self.router = main_app.router
        self.state = main_app.state

    async def __call__(self, scope, receive, send):
        path = scope.get("path", "")
        if is_ops_path(path):
            await self.ops_app(scope, receive, send)
            return
        await self.main_app(scope, receive, send)


def build_http_app(
    cfg: HttpConfig | None = None,
    *,
    client_provider: Optional[Callable[[], ZendeskClient]] = None,
):
    """
    Return an ASGI app serving MCP over streamable HTTP at ``cfg.path`` plus
    ``/healthz`` and ``/readyz``.

    Without an explicit ``client_provider`` the Zendesk client is built from
    the environment on the first tool call and shared afterwards, so the app
    starts even when credentials are missing (readiness reports it).
    """
    cfg = cfg or HttpConfig.from_env()
    settings = load_env_config(use_dotenv=True)
    provider = client_provider or LazyClientProvider(use_dotenv=False)
    session_manager = build_session_manager(cfg, provider)

    @contextlib.asynccontextmanager
    async def lifespan(_app):
        async with session_manager.run():
            yield
        if isinstance(provider, LazyClientProvider):
            await provider.aclose()

    main_app = Starlette(
        routes=[Route(cfg.path, endpoint=StreamableHTTPEndpoint(session_manager))],
        lifespan=lifespan,
    )
    main_app.add_middleware(RequestIdMiddleware)

    readiness_state = compute_readiness_state(settings)
    main_app.state.readiness = readiness_state
    main_app.state.session_manager = session_manager

    ops_app = _build_ops_app(readiness_state)

    return OpsDispatcher(ops_app, main_app)


__all__ = ["HttpConfig", "build_http_app", "build_session_manager"]
