"""Core domain surface for zendesk-mcp (transport-agnostic)."""

from .auth import BasicCredentials, BearerCredentials, Credentials, resolve_credentials
from .client import ZendeskClient
from .config import (
    LazyClientProvider,
    ZendeskSettings,
    create_client_from_env,
    load_env_config,
)
from .context import current_request_id, current_tool, request_scope, tool_scope
from .errors import (
    ZendeskClientError,
    ZendeskConfigError,
    ZendeskHTTPError,
    ZendeskParseError,
)
from .registry import (
    ToolRegistry,
    ToolSpec,
    UnknownToolError,
    build_registry,
    discover_tool_modules,
)
from .resources import ResourceSpec, crud_tools

__all__ = [
    # Client
    "ZendeskClient",
    # Auth
    "BasicCredentials",
    "BearerCredentials",
    "Credentials",
    "resolve_credentials",
    # Exceptions
    "ZendeskClientError",
    "ZendeskConfigError",
    "ZendeskHTTPError",
    "ZendeskParseError",
    # Config helpers
    "ZendeskSettings",
    "create_client_from_env",
    "LazyClientProvider",
    "load_env_config",
    # Registry helpers
    "ToolRegistry",
    "ToolSpec",
    "UnknownToolError",
    "build_registry",
    "discover_tool_modules",
    "ResourceSpec",
    "crud_tools",
    # Context
    "request_scope",
    "tool_scope",
    "current_request_id",
    "current_tool",
]
