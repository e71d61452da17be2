"""HTTP client for a Crawl4AI-compatible crawling service.

The client only moves JSON over HTTP. It has no retry or polling logic;
every transport-level failure is raised as ``TransportError``.
"""

from typing import Any
from urllib.parse import quote

import httpx

from models.crawl import DEFAULT_JOB_CONFIG, CrawlJobConfig
from models.errors import TransportError
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_S = 120.0


def _error_message(exc: httpx.HTTPError) -> str:
    """Prefer the service's own ``message`` field over httpx's description."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return str(exc) or type(exc).__name__


class Crawl4AIClient:
    """
    Thin async client bound to one crawling service.

    Safe for concurrent use: it keeps no per-call state besides the
    underlying httpx connection pool.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: str | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Root URL of the crawling service
            auth_token: Optional bearer token; no Authorization header is sent without one
            timeout_s: Timeout for a single HTTP exchange
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        headers = {"Authorization": f"Bearer {auth_token}"} if auth_token else {}
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout_s,
            transport=transport,
        )

    async def __aenter__(self) -> "Crawl4AIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = _error_message(exc)
            logger.warning(
                "Crawling service returned an error status",
                extra={
                    "extra_fields": {
                        "method": method,
                        "path": path,
                        "status_code": exc.response.status_code,
                        "error": message,
                    }
                },
            )
            raise TransportError(message, status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            message = _error_message(exc)
            logger.warning(
                "Crawling service request failed",
                extra={
                    "extra_fields": {
                        "method": method,
                        "path": path,
                        "error": message,
                        "error_type": type(exc).__name__,
                    }
                },
            )
            raise TransportError(message) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"Malformed response body from {method} {path}: {exc}",
                status_code=response.status_code,
            ) from exc

    async def submit(self, urls: list[str], job_config: CrawlJobConfig = DEFAULT_JOB_CONFIG) -> Any:
        """Submit a deferred crawl job (``POST /crawl``) and return the raw JSON."""
        return await self._request("POST", "/crawl", json=job_config.to_payload(urls))

    async def submit_direct(
        self, urls: list[str], job_config: CrawlJobConfig = DEFAULT_JOB_CONFIG
    ) -> Any:
        """Run a crawl synchronously (``POST /crawl_direct``) and return the raw JSON."""
        return await self._request("POST", "/crawl_direct", json=job_config.to_payload(urls))

    async def poll_status(self, task_id: str) -> Any:
        """Fetch the current state of a deferred job (``GET /task/{task_id}``)."""
        return await self._request("GET", f"/task/{quote(task_id, safe='')}")
