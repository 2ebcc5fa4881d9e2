"""MCP stdio server exposing the bridge tools."""

import asyncio
import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from shellbridge import __version__
from shellbridge.application.services import ToolRouter
from shellbridge.composition import create_container
from shellbridge.container import Container
from shellbridge.logging_setup import setup_logging_from_env

logger = logging.getLogger(__name__)

SERVER_NAME = "shellbridge"


def to_mcp_tools(router: ToolRouter) -> list[types.Tool]:
    """Convert router tool specs to MCP tool definitions."""
    return [
        types.Tool(name=spec.name, description=spec.description, inputSchema=spec.input_schema)
        for spec in router.list_tools()
    ]


def create_server(container: Container) -> Server:
    """Create the MCP server bound to the container's tool router."""
    server = Server(SERVER_NAME)
    router = container.tool_router

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return to_mcp_tools(router)

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        result = await router.call(name, arguments or {})
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=result.text)],
            isError=result.is_error,
        )

    return server


async def serve(container: Container) -> None:
    """Run the server over stdio until the client disconnects."""
    server = create_server(container)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await container.connection_manager.disconnect()
        logger.info("MCP server stopped")


def main() -> None:
    """Entry point for the ``shellbridge`` command."""
    from shellbridge.cli import parse_server_args

    args = parse_server_args()
    setup_logging_from_env(verbose=args.verbose)

    container = create_container(config_path=args.config)
    logger.info(
        "MCP server starting version=%s terminal=%s knowledge=%s",
        __version__,
        container.config.terminal.url,
        container.config.knowledge.url,
    )
    asyncio.run(serve(container))


if __name__ == "__main__":
    main()
