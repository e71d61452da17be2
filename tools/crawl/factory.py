"""Factory for creating the crawl tool service from environment configuration."""

from api.crawl4ai_client import Crawl4AIClient
from config.config import Config, CrawlProtocol
from utils.logger import get_logger

from .poller import JobPoller
from .resolvers import CrawlResolver, DeferredTaskResolver, ImmediateResolver
from .service import CrawlToolService

logger = get_logger(__name__)


def build_resolver(config: Config, client: Crawl4AIClient) -> CrawlResolver:
    if config.protocol is CrawlProtocol.IMMEDIATE:
        return ImmediateResolver(client)
    poller = JobPoller(
        client,
        max_attempts=config.MAX_POLL_ATTEMPTS,
        interval_s=config.poll_interval_s,
    )
    return DeferredTaskResolver(client, poller)


def create_crawl_service_from_env(config: Config | None = None) -> CrawlToolService:
    """
    Create the crawl tool service from environment variables.

    Environment variables:
        CRAWL4AI_API_URL: Crawling service base URL (default: http://127.0.0.1:11235)
        CRAWL4AI_AUTH_TOKEN: Optional bearer token
        CRAWL4AI_PROTOCOL: "deferred" (default) or "immediate"
        CRAWL4AI_MAX_POLL_ATTEMPTS / CRAWL4AI_POLL_INTERVAL_MS: Poll budget
        CRAWL4AI_HTTP_TIMEOUT_S: Per-request transport timeout

    Returns:
        Configured CrawlToolService instance

    Raises:
        ValueError: If the configuration is invalid
    """
    config = config or Config()
    if not config.validate():
        raise ValueError("Invalid crawl bridge configuration")

    client = Crawl4AIClient(
        base_url=config.API_URL,
        auth_token=config.AUTH_TOKEN,
        timeout_s=config.HTTP_TIMEOUT_S,
    )
    logger.info(f"Using {config.get_service_info()}")

    return CrawlToolService(build_resolver(config, client))
