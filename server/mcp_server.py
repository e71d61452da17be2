"""MCP stdio server exposing the crawl tool."""

from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from models.errors import CrawlToolError, InvalidParamsError, MethodNotFoundError
from tools.crawl import CrawlToolService
from utils.logger import get_logger

logger = get_logger(__name__)

SERVER_NAME = "crawl4ai-mcp"
SERVER_VERSION = "0.1.0"


def error_code_for(exc: CrawlToolError) -> int:
    if isinstance(exc, InvalidParamsError):
        return types.INVALID_PARAMS
    if isinstance(exc, MethodNotFoundError):
        return types.METHOD_NOT_FOUND
    return types.INTERNAL_ERROR


def to_mcp_error(exc: CrawlToolError) -> McpError:
    data: dict[str, Any] = {"kind": exc.code, **exc.details}
    return McpError(types.ErrorData(code=error_code_for(exc), message=exc.message, data=data))


def describe_tools(service: CrawlToolService) -> list[types.Tool]:
    return [
        types.Tool(name=tool["name"], description=tool["description"], inputSchema=tool["inputSchema"])
        for tool in service.list_tools()
    ]


async def dispatch_tool_call(
    service: CrawlToolService, name: str, arguments: Any
) -> types.CallToolResult:
    """
    Run a tool call and translate the outcome into MCP terms.

    Raises:
        McpError: For every hard fault raised by the service
    """
    try:
        result = await service.call_tool(name, arguments)
    except CrawlToolError as e:
        logger.error(
            f"Tool call failed: {e.message}",
            extra={"extra_fields": {"tool": name, "kind": e.code, **e.details}},
        )
        raise to_mcp_error(e) from e

    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


def create_mcp_server(service: CrawlToolService) -> Server:
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return describe_tools(service)

    # Not @server.call_tool(): it converts raised errors into isError results, and hard
    # faults must reach the client as JSON-RPC errors. Arguments are checked by the service.
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        result = await dispatch_tool_call(service, req.params.name, req.params.arguments)
        return types.ServerResult(result)

    server.request_handlers[types.CallToolRequest] = call_tool

    return server


async def run_stdio(service: CrawlToolService) -> None:
    server = create_mcp_server(service)
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Crawl4AI MCP server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await service.aclose()
        logger.info("Crawl4AI MCP server stopped")
