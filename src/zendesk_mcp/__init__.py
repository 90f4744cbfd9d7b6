"""zendesk_mcp package exports."""

__version__ = "0.1.0"

from .core import (  # noqa: E402
    ToolRegistry,
    ToolSpec,
    ZendeskClient,
    ZendeskClientError,
    ZendeskConfigError,
    ZendeskHTTPError,
    ZendeskParseError,
    build_registry,
    create_client_from_env,
)

__all__ = [
    "__version__",
    # Client
    "ZendeskClient",
    "create_client_from_env",
    # Exceptions
    "ZendeskClientError",
    "ZendeskConfigError",
    "ZendeskHTTPError",
    "ZendeskParseError",
    # Registry
    "ToolRegistry",
    "ToolSpec",
    "build_registry",
]
