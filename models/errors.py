"""Error taxonomy for the crawl tool.

Every failure raised by the crawl pipeline is a ``CrawlToolError`` with a
machine-readable ``code``. All of them are hard faults except
``TransportError``, which the tool facade turns into an in-band error result.
"""

from typing import Any


class CrawlToolError(Exception):
    code = "unknown"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.code, "message": self.message, "details": dict(self.details)}


class InvalidParamsError(CrawlToolError):
    code = "invalid_params"


class MethodNotFoundError(CrawlToolError):
    code = "method_not_found"


class UpstreamProtocolError(CrawlToolError):
    """The crawling service answered with a shape the bridge cannot interpret."""

    code = "upstream_protocol_error"


class UpstreamJobFailedError(CrawlToolError):
    """The crawling service reported the job as failed; ``message`` is its own."""

    code = "upstream_job_failed"

    def __init__(self, message: str, task_id: str):
        super().__init__(message, task_id=task_id)
        self.task_id = task_id


class UpstreamTimeoutError(CrawlToolError):
    code = "upstream_timeout"

    def __init__(self, task_id: str, attempts: int):
        super().__init__(
            f"Task {task_id} did not complete within the expected time ({attempts} attempts)",
            task_id=task_id,
            attempts=attempts,
        )
        self.task_id = task_id
        self.attempts = attempts


class TransportError(CrawlToolError):
    """Network or HTTP-level failure talking to the crawling service."""

    code = "transport_error"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, status_code=status_code)
        self.status_code = status_code
