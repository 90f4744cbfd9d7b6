from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server.lowlevel import Server

from zendesk_mcp import __version__
from zendesk_mcp.core.registry import ToolRegistry

SERVER_NAME = "zendesk-mcp"

log = logging.getLogger(__name__)


def create_server(registry: ToolRegistry) -> Server:
    """
    Wire a ToolRegistry into an MCP protocol server.

    Input validation is left to the registry so that bad arguments come back
    through the same ``Error: ...`` envelope as upstream failures.
    """
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return registry.list_tools()

    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: Optional[Dict[str, Any]]
    ) -> types.CallToolResult:
        return await registry.call(name, arguments)

    log.info("Built MCP server %s with %d tools", SERVER_NAME, len(registry.names))
    return server


__all__ = ["SERVER_NAME", "create_server"]
