"""Health check endpoint."""

from datetime import datetime

from fastapi import APIRouter, Depends

from server.dependencies import get_crawl_service
from server.schemas.responses import HealthResponseDTO
from tools.crawl import CrawlToolService

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponseDTO)
async def health_check(service: CrawlToolService = Depends(get_crawl_service)):
    """Report liveness and which upstream this bridge talks to (no upstream call is made)."""
    return HealthResponseDTO(
        status="healthy",
        timestamp=datetime.utcnow().isoformat() + "Z",
        version="0.1.0",
        upstream_url=service.resolver.client.base_url,
        protocol=service.resolver.protocol,
    )
