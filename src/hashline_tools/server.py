"""
Hashline MCP Server

Exposes hashline_read and hashline_edit via Model Context Protocol using FastMCP.

Usage:
    # HTTP transport
    hashline serve --port 8001

    # STDIO transport (for local MCP clients)
    hashline serve --stdio

Environment Variables:
    MCP_PORT        - Server port (default: 4001)
    MCP_HOST        - Server host (default: 127.0.0.1)
    HASHLINE_ROOT   - Directory the tools may read and write (default: cwd)
"""

import signal
import sys

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from . import config
from .logging_config import get_logger
from .tools import register_all_tools

logger = get_logger(__name__)


def create_app(root: str | None = None) -> FastMCP:
    """Create and configure the MCP application."""
    mcp = FastMCP(config.SERVER_NAME)

    tools = register_all_tools(mcp, root=root)
    logger.info("registered tools", count=len(tools), root=root or config.WORKSPACE_ROOT)

    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        return PlainTextResponse("OK", status_code=200)

    return mcp


def register_shutdown_handlers() -> None:
    """Handle termination signals gracefully."""

    def shutdown_handler(signum, frame):
        logger.info("shutting down", signal=signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)


def run_server(
    stdio: bool = False,
    host: str = config.DEFAULT_HOST,
    port: int = config.DEFAULT_PORT,
    root: str | None = None,
) -> None:
    register_shutdown_handlers()
    mcp = create_app(root=root)

    if stdio:
        logger.info("starting MCP in STDIO mode")
        mcp.run(transport="stdio")
    else:
        logger.info("starting HTTP server", host=host, port=port)
        mcp.run(transport="http", host=host, port=port)
