"""Crawl endpoints: list the tool and call it over HTTP."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from models.errors import (
    CrawlToolError,
    InvalidParamsError,
    MethodNotFoundError,
    UpstreamTimeoutError,
)
from server.dependencies import get_crawl_service
from server.schemas.responses import ErrorDTO, ToolDTO, ToolListResponseDTO, ToolResultDTO
from tools.crawl import TOOL_NAME, CrawlToolService
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Crawl"])


def status_code_for(exc: CrawlToolError) -> int:
    if isinstance(exc, InvalidParamsError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, MethodNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, UpstreamTimeoutError):
        return status.HTTP_504_GATEWAY_TIMEOUT
    return status.HTTP_502_BAD_GATEWAY


async def _call(service: CrawlToolService, name: str, arguments: Any) -> ToolResultDTO:
    try:
        result = await service.call_tool(name, arguments)
    except CrawlToolError as e:
        code = status_code_for(e)
        logger.warning(
            f"Tool call rejected: {e.message}",
            extra={"extra_fields": {"tool": name, "kind": e.code, "status_code": code}},
        )
        raise HTTPException(
            status_code=code,
            detail=ErrorDTO(kind=e.code, message=e.message, details=e.details).model_dump(),
        ) from e
    return ToolResultDTO.from_tool_result(result)


@router.get("/tools", response_model=ToolListResponseDTO)
async def list_tools(service: CrawlToolService = Depends(get_crawl_service)):
    return ToolListResponseDTO(
        tools=[
            ToolDTO(name=t["name"], description=t["description"], input_schema=t["inputSchema"])
            for t in service.list_tools()
        ]
    )


@router.post("/crawl", response_model=ToolResultDTO)
async def crawl(
    arguments: Any = Body(...),
    service: CrawlToolService = Depends(get_crawl_service),
):
    """
    Crawl URLs and return the joined markdown.

    Upstream outages come back as 200 with ``is_error=true``; malformed
    requests and broken upstream contracts are HTTP errors.
    """
    return await _call(service, TOOL_NAME, arguments)


@router.post("/tools/{tool_name}", response_model=ToolResultDTO)
async def call_tool(
    tool_name: str,
    arguments: Any = Body(...),
    service: CrawlToolService = Depends(get_crawl_service),
):
    """Generic tool call, mirroring the MCP ``tools/call`` request."""
    return await _call(service, tool_name, arguments)
