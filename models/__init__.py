"""
Models package for crawl contracts and errors.
"""

from .crawl import CrawlJobConfig, CrawlRequest, JobStatus, SubmittedJob, ToolResult
from .errors import CrawlToolError, TransportError

__all__ = [
    "CrawlJobConfig",
    "CrawlRequest",
    "CrawlToolError",
    "JobStatus",
    "SubmittedJob",
    "ToolResult",
    "TransportError",
]
