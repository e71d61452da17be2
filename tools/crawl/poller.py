"""Submit-then-poll state machine for deferred crawl tasks."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from api.crawl4ai_client import Crawl4AIClient
from models.crawl import JobStatus, ResultItem, SubmittedJob
from models.errors import UpstreamJobFailedError, UpstreamProtocolError, UpstreamTimeoutError
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 30
DEFAULT_INTERVAL_S = 2.0

SleepFn = Callable[[float], Awaitable[Any]]


def task_from_submit_response(payload: Any) -> SubmittedJob:
    """
    Read the task id out of a ``POST /crawl`` response.

    Raises:
        UpstreamProtocolError: If the response carries no task id
    """
    task_id = payload.get("task_id") if isinstance(payload, dict) else None
    if not task_id:
        raise UpstreamProtocolError(
            "Invalid response format from crawling service: No task ID",
            field="task_id",
        )
    return SubmittedJob(task_id=str(task_id))


def parse_job_status(payload: Any, task_id: str) -> JobStatus:
    if not isinstance(payload, dict):
        raise UpstreamProtocolError(
            "Invalid response format from crawling service: task status is not an object",
            field="status",
            task_id=task_id,
        )
    results = payload.get("results")
    if results is not None and not isinstance(results, list):
        raise UpstreamProtocolError(
            "Invalid response format from crawling service: results is not a list",
            field="results",
            task_id=task_id,
        )
    error = payload.get("error")
    return JobStatus(
        status=payload.get("status"),
        results=results,
        error=str(error) if error else None,
    )


class JobPoller:
    """
    Drives one deferred task to a terminal state.

    At most ``max_attempts`` status checks are made, separated by
    ``interval_s`` seconds. Nothing is kept on the instance between runs, so
    one poller can serve concurrent tool calls.
    """

    def __init__(
        self,
        client: Crawl4AIClient,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        interval_s: float = DEFAULT_INTERVAL_S,
        sleep: SleepFn = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.client = client
        self.max_attempts = max_attempts
        self.interval_s = interval_s
        self._sleep = sleep

    async def run(self, job: SubmittedJob, require_results: bool = True) -> list[ResultItem]:
        """
        Poll until the task completes, fails, or the attempt budget runs out.

        Args:
            job: Task returned by the submit call
            require_results: Treat a completed task without results as a protocol error

        Returns:
            The completed task's result items, in upstream order

        Raises:
            UpstreamProtocolError: Status payload cannot be interpreted
            UpstreamJobFailedError: Upstream reported the task as failed
            UpstreamTimeoutError: No terminal status within ``max_attempts`` polls
        """
        task_id = job.task_id
        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1:
                await self._sleep(self.interval_s)

            status = parse_job_status(await self.client.poll_status(task_id), task_id)

            if status.is_completed:
                if not status.results and require_results:
                    raise UpstreamProtocolError(
                        "Invalid response format from crawling service: No results in completed task",
                        field="results",
                        task_id=task_id,
                    )
                logger.info(
                    f"Task {task_id} completed",
                    extra={
                        "extra_fields": {
                            "task_id": task_id,
                            "attempt": attempt,
                            "result_count": len(status.results or []),
                        }
                    },
                )
                return list(status.results or [])

            if status.is_failed:
                message = status.error or "Unknown error"
                logger.error(
                    f"Task {task_id} failed: {message}",
                    extra={"extra_fields": {"task_id": task_id, "attempt": attempt}},
                )
                raise UpstreamJobFailedError(message, task_id=task_id)

            logger.info(
                f"Task {task_id} not completed yet (attempt {attempt}/{self.max_attempts}), "
                f"status: {status.status}",
                extra={
                    "extra_fields": {
                        "task_id": task_id,
                        "attempt": attempt,
                        "max_attempts": self.max_attempts,
                        "status": status.status,
                    }
                },
            )

        logger.error(
            f"Task {task_id} timed out after {self.max_attempts} attempts",
            extra={"extra_fields": {"task_id": task_id, "attempts": self.max_attempts}},
        )
        raise UpstreamTimeoutError(task_id, self.max_attempts)
