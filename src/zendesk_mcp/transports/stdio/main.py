from __future__ import annotations

import asyncio
import logging
import sys

from mcp.server.stdio import stdio_server

from zendesk_mcp.core.config import ENV_HELP, create_client_from_env, load_env_config
from zendesk_mcp.core.errors import ZendeskConfigError
from zendesk_mcp.core.logging import setup_logging
from zendesk_mcp.core.registry import build_registry
from zendesk_mcp.server import SERVER_NAME, create_server

log = logging.getLogger(__name__)


async def main() -> None:
    settings = load_env_config(use_dotenv=True)
    setup_logging(settings.log_level)

    client = create_client_from_env(use_dotenv=False)
    registry = build_registry(client)
    server = create_server(registry)

    log.info("%s running on stdio", SERVER_NAME)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await client.aclose()


def print_config_help(exc: Exception, stream=None) -> None:
    stream = stream or sys.stderr
    print(f"Error: {exc}", file=stream)
    print("Required environment variables:", file=stream)
    for name, help_text in ENV_HELP.items():
        print(f"  {name:<20} {help_text}", file=stream)


def run() -> None:
    """Console entry point for the stdio transport."""
    try:
        asyncio.run(main())
    except ZendeskConfigError as exc:
        print_config_help(exc)
        sys.exit(1)


if __name__ == "__main__":
    run()
