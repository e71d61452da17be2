"""Data contracts for the crawl bridge."""

import copy
from dataclasses import dataclass, field
from typing import Any

ResultItem = dict[str, Any]

STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


def _default_crawler_params() -> dict[str, Any]:
    return {
        "headless": True,
        "page_timeout": 30000,
        "remove_overlay_elements": True,
        "browser_type": "chromium",
        "scan_full_page": True,
        "user_agent_mode": "random",
        "user_agent_generator_config": {
            "device_type": "mobile",
            "os_type": "android",
        },
    }


@dataclass(frozen=True)
class CrawlRequest:
    """Validated caller input."""

    urls: tuple[str, ...] = ()


@dataclass(frozen=True)
class CrawlJobConfig:
    """Fixed crawler options merged with the caller's urls on every submission."""

    priority: int = 10
    magic: bool = True
    crawler_params: dict[str, Any] = field(default_factory=_default_crawler_params)
    bypass_cache: bool = True
    ignore_images: bool = True

    def to_payload(self, urls: list[str] | tuple[str, ...]) -> dict[str, Any]:
        return {
            "priority": self.priority,
            "magic": self.magic,
            "crawler_params": copy.deepcopy(self.crawler_params),
            "bypass_cache": self.bypass_cache,
            "ignore_images": self.ignore_images,
            "urls": list(urls),
        }


DEFAULT_JOB_CONFIG = CrawlJobConfig()


@dataclass(frozen=True)
class SubmittedJob:
    task_id: str


@dataclass(frozen=True)
class JobStatus:
    """One poll snapshot of an upstream task."""

    status: str | None
    results: list[ResultItem] | None = None
    error: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    @property
    def is_failed(self) -> bool:
        return self.status == STATUS_FAILED


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "is_error": self.is_error}
