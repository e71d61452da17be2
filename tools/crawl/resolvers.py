"""Submit-and-resolve strategies, one per upstream protocol."""

from abc import ABC, abstractmethod

from api.crawl4ai_client import Crawl4AIClient
from models.crawl import DEFAULT_JOB_CONFIG, CrawlJobConfig
from models.errors import UpstreamProtocolError
from utils.logger import get_logger

from .normalizer import normalize_deferred_results, normalize_immediate_results
from .poller import JobPoller, task_from_submit_response

logger = get_logger(__name__)


class CrawlResolver(ABC):
    """
    Abstract base class for crawl protocols.
    A resolver takes the caller's urls to one text section per result item.
    """

    protocol = "abstract"

    def __init__(self, client: Crawl4AIClient, job_config: CrawlJobConfig = DEFAULT_JOB_CONFIG):
        self.client = client
        self.job_config = job_config

    @abstractmethod
    async def resolve(self, urls: list[str]) -> list[str]:
        """
        Crawl ``urls`` and return the extracted sections in upstream order.

        Raises:
            TransportError: The crawling service could not be reached
            CrawlToolError: Any hard fault of the protocol
        """


class DeferredTaskResolver(CrawlResolver):
    """``POST /crawl`` followed by ``GET /task/{id}`` until the task is terminal."""

    protocol = "deferred"

    def __init__(
        self,
        client: Crawl4AIClient,
        poller: JobPoller,
        job_config: CrawlJobConfig = DEFAULT_JOB_CONFIG,
    ):
        super().__init__(client, job_config)
        self.poller = poller

    async def resolve(self, urls: list[str]) -> list[str]:
        job = task_from_submit_response(await self.client.submit(urls, self.job_config))
        logger.info(
            f"Task {job.task_id} submitted, polling for results...",
            extra={"extra_fields": {"task_id": job.task_id, "url_count": len(urls)}},
        )
        # An empty batch legitimately completes with nothing to report
        results = await self.poller.run(job, require_results=bool(urls))
        return normalize_deferred_results(results)


class ImmediateResolver(CrawlResolver):
    """``POST /crawl_direct`` with results inline in the response."""

    protocol = "immediate"

    async def resolve(self, urls: list[str]) -> list[str]:
        logger.info(
            "Submitting direct crawl",
            extra={"extra_fields": {"url_count": len(urls)}},
        )
        payload = await self.client.submit_direct(urls, self.job_config)

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise UpstreamProtocolError(
                "Invalid response format from crawling service: No results list",
                field="results",
            )
        if urls and not results:
            raise UpstreamProtocolError(
                "Invalid response format from crawling service: No results in response",
                field="results",
            )
        logger.info(
            "Direct crawl completed",
            extra={"extra_fields": {"result_count": len(results)}},
        )
        return normalize_immediate_results(results)
