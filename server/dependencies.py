"""FastAPI dependencies for crawl service access."""

from tools.crawl import CrawlToolService, create_crawl_service_from_env


def get_crawl_service() -> CrawlToolService:
    """Dependency to get crawl service instance (singleton pattern)."""
    if not hasattr(get_crawl_service, "_instance"):
        get_crawl_service._instance = create_crawl_service_from_env()
    return get_crawl_service._instance


async def close_crawl_service() -> None:
    service = getattr(get_crawl_service, "_instance", None)
    if service is not None:
        await service.aclose()
        del get_crawl_service._instance
