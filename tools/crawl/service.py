"""The ``crawl_urls`` tool."""

from typing import Any

from models.crawl import ToolResult
from models.errors import MethodNotFoundError, TransportError
from utils.logger import get_logger

from .normalizer import join_sections
from .resolvers import CrawlResolver
from .validator import parse_crawl_request

logger = get_logger(__name__)

TOOL_NAME = "crawl_urls"
TOOL_DESCRIPTION = "Crawl one or more URLs and return markdown content with citations"
TOOL_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "urls": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Array of URLs to crawl",
        }
    },
    "required": ["urls"],
}


class CrawlToolService:
    """
    Single entry point for tool calls.

    Hard faults (bad arguments, unknown tool, broken upstream contract,
    failed or timed-out task) are raised as ``CrawlToolError`` subclasses.
    A ``TransportError`` is returned as an error ``ToolResult`` instead, so
    the calling agent sees "the service is down" as content.
    """

    def __init__(self, resolver: CrawlResolver):
        self.resolver = resolver

    def list_tools(self) -> list[dict[str, Any]]:
        return [
            {
                "name": TOOL_NAME,
                "description": TOOL_DESCRIPTION,
                "inputSchema": TOOL_INPUT_SCHEMA,
            }
        ]

    async def call_tool(self, name: str, arguments: Any) -> ToolResult:
        """
        Run a tool call end to end.

        Args:
            name: Requested tool name
            arguments: Untrusted tool arguments

        Returns:
            ToolResult with the joined sections, or a soft transport error
        """
        if name != TOOL_NAME:
            raise MethodNotFoundError(f"Unknown tool: {name}", tool=name)

        request = parse_crawl_request(arguments)

        try:
            sections = await self.resolver.resolve(list(request.urls))
        except TransportError as e:
            logger.error(
                f"Crawling service error: {e.message}",
                extra={"extra_fields": {"status_code": e.status_code, "url_count": len(request.urls)}},
            )
            return ToolResult(text=f"Crawling service error: {e.message}", is_error=True)

        return ToolResult(text=join_sections(sections), is_error=False)

    async def aclose(self) -> None:
        await self.resolver.client.aclose()
