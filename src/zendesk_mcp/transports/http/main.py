from __future__ import annotations

import asyncio
import logging

import uvicorn

from zendesk_mcp.core.config import load_env_config
from zendesk_mcp.core.logging import setup_logging

from .app import build_http_app
from .config import HttpConfig

log = logging.getLogger(__name__)


async def main() -> None:
    setup_logging(load_env_config(use_dotenv=True).log_level)
    cfg = HttpConfig.from_env()
    app = build_http_app(cfg)

    # uvicorn would otherwise install its own default log config
    config = uvicorn.Config(app, host=cfg.host, port=cfg.port, log_config=None)
    server = uvicorn.Server(config)
    log.info("Serving MCP on http://%s:%s%s", cfg.host, cfg.port, cfg.path)
    await server.serve()


def run() -> None:
    """Console entry point for the HTTP transport."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
