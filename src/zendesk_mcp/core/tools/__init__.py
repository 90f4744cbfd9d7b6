"""
Zendesk tool modules. Each module exposes ``tools() -> list[ToolSpec]`` and is
picked up by ``zendesk_mcp.core.registry.discover_tool_modules``.
"""
