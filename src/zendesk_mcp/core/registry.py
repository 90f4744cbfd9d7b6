from __future__ import annotations

import importlib
import json
import logging
import pkgutil
import time
from dataclasses import dataclass, field
from types import ModuleType
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
)

from mcp import types

from .client import ZendeskClient
from .context import tool_scope
from .observability import log_event

log = logging.getLogger("zendesk_mcp.core.registry")

ToolHandler = Callable[[ZendeskClient, Dict[str, Any]], Awaitable[Any]]
ClientProvider = Callable[[], ZendeskClient]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: Dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )
    handler: Optional[ToolHandler] = None

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


class UnknownToolError(LookupError):
    pass


def format_result(result: Any) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False, default=str)


def text_result(text: str, *, is_error: bool = False) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


# --- Discovery helpers ----------------------------------------------------- #


def discover_tool_modules(
    package_name: str = "zendesk_mcp.core.tools",
) -> List[ModuleType]:
    """Import all modules under the given tools package, skipping failures."""
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        name = finder.name
        try:
            module = importlib.import_module(name)
            modules.append(module)
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", name, exc)
            continue

    return modules


def iter_tool_specs(module: ModuleType) -> Iterable[ToolSpec]:
    """Yield the ToolSpecs a module publishes through its ``tools()`` function."""
    factory = getattr(module, "tools", None)
    if not callable(factory):
        log.debug("Skipping %s: no tools() factory", module.__name__)
        return
    for spec in factory():
        if not isinstance(spec, ToolSpec) or spec.handler is None:
            log.debug("Skipping malformed tool in %s: %r", module.__name__, spec)
            continue
        yield spec


# --- Registry -------------------------------------------------------------- #


class ToolRegistry:
    """
    Name -> ToolSpec table plus the single error boundary for tool calls.
    Handlers receive the client from ``client_provider`` and may raise;
    ``call`` turns every failure into an error-flagged result.
    """

    def __init__(
        self,
        client_provider: ClientProvider | ZendeskClient,
        specs: Iterable[ToolSpec] = (),
    ):
        if isinstance(client_provider, ZendeskClient):
            _client = client_provider

            def client_provider() -> ZendeskClient:
                return _client

        self._client_provider: ClientProvider = client_provider
        self._specs: Dict[str, ToolSpec] = {}
        for spec in specs:
            self.add(spec)

    def add(self, spec: ToolSpec) -> None:
        if spec.name in self._specs:
            raise ValueError(f"Duplicate tool name detected: {spec.name}")
        self._specs[spec.name] = spec

    @property
    def names(self) -> List[str]:
        return list(self._specs)

    def get(self, name: str) -> Optional[ToolSpec]:
        return self._specs.get(name)

    def list_tools(self) -> List[types.Tool]:
        return [spec.to_mcp_tool() for spec in self._specs.values()]

    async def call(
        self, name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> types.CallToolResult:
        start = time.perf_counter()
        with tool_scope(name):
            try:
                spec = self._specs.get(name)
                if spec is None:
                    raise UnknownToolError(f"Unknown tool: {name}")
                result = await spec.handler(self._client_provider(), dict(arguments or {}))
                text = format_result(result)
            except Exception as exc:
                log_event(
                    "tool_call",
                    logger=log,
                    level=logging.WARNING,
                    status="error",
                    error_type=type(exc).__name__,
                    duration_ms=int((time.perf_counter() - start) * 1000),
                )
                return text_result(f"Error: {exc}", is_error=True)

            log_event(
                "tool_call",
                logger=log,
                status="ok",
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            return text_result(text)


def build_registry(
    client_provider: ClientProvider | ZendeskClient,
    modules: List[ModuleType] | None = None,
) -> ToolRegistry:
    """Collect ToolSpecs from tool modules into a registry."""
    registry = ToolRegistry(client_provider)
    modules = modules if modules is not None else discover_tool_modules()

    for module in modules:
        for spec in iter_tool_specs(module):
            registry.add(spec)
            log.debug("Registered tool: %s (%s)", spec.name, module.__name__)

    log.info("Registered %d tools", len(registry.names))
    return registry


__all__ = [
    "ToolSpec",
    "ToolHandler",
    "ToolRegistry",
    "UnknownToolError",
    "build_registry",
    "discover_tool_modules",
    "iter_tool_specs",
    "format_result",
    "text_result",
]
