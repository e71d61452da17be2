"""Crawl tool: validation, upstream job resolution and result normalization."""

from .factory import create_crawl_service_from_env
from .service import TOOL_NAME, CrawlToolService

__all__ = ["TOOL_NAME", "CrawlToolService", "create_crawl_service_from_env"]
