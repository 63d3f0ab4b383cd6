"""API routes implementation."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from shortlinks.database.models import ShortLink
from shortlinks.service import ShortLinkService
from .schemas import (
    ShortenRequest,
    ShortLinkResponse,
    LinkInfoResponse,
    LinkListResponse,
    MessageResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from ..dependencies import get_owner, get_service, short_url_for

router = APIRouter()


def _to_response(request: Request, link: ShortLink) -> ShortLinkResponse:
    return ShortLinkResponse(
        code=link.code,
        destination=link.destination,
        click_count=link.click_count,
        created_at=link.created_at,
        short_url=short_url_for(request, link.code),
    )


@router.post(
    "/shorten",
    response_model=ShortLinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid alias or missing destination"},
        409: {"model": ErrorResponse, "description": "Alias already in use"},
        500: {"model": ErrorResponse, "description": "Could not generate a free short code"},
    },
    summary="Create short URL",
    description="Create a short link. Anonymous callers get unowned links.",
)
async def shorten_url(
    request: Request,
    body: ShortenRequest,
    service: ShortLinkService = Depends(get_service),
    owner: Optional[str] = Depends(get_owner),
):
    """Create a shortened URL."""
    # An empty alias means none; any other value is validated as sent
    alias = body.alias or None
    destination = body.destination.strip() if body.destination else None

    link = await service.create_link(destination, alias=alias, owner=owner)
    return _to_response(request, link)


@router.get(
    "/my-urls",
    response_model=LinkListResponse,
    responses={401: {"model": ErrorResponse, "description": "No owner identity"}},
    summary="List my short URLs",
)
async def list_my_urls(
    request: Request,
    limit: int = Query(100, ge=1, le=500),
    service: ShortLinkService = Depends(get_service),
    owner: Optional[str] = Depends(get_owner),
):
    """List the caller's links, newest first."""
    links = await service.list_links(owner, limit=limit)
    items = [_to_response(request, link) for link in links]
    return LinkListResponse(items=items, count=len(items))


@router.get(
    "/urls/{code}",
    response_model=LinkInfoResponse,
    responses={404: {"model": ErrorResponse, "description": "Short code not found"}},
    summary="Get URL information",
    description="Get information about a short link including its click count.",
)
async def get_url_info(code: str, service: ShortLinkService = Depends(get_service)):
    """Get information about a short link."""
    link = await service.get_link(code)
    return LinkInfoResponse(
        code=link.code,
        destination=link.destination,
        click_count=link.click_count,
        created_at=link.created_at,
        last_accessed=link.last_accessed,
    )


@router.delete(
    "/urls/{code}",
    response_model=MessageResponse,
    responses={
        401: {"model": ErrorResponse, "description": "No owner identity"},
        404: {"model": ErrorResponse, "description": "Not found or not owned by caller"},
    },
    summary="Delete short URL",
)
async def delete_url(
    code: str,
    service: ShortLinkService = Depends(get_service),
    owner: Optional[str] = Depends(get_owner),
):
    """Delete one of the caller's links."""
    await service.delete_link(code, owner)
    return MessageResponse(message=f"Short URL '{code}' deleted")


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get service-wide statistics.",
)
async def get_statistics(service: ShortLinkService = Depends(get_service)):
    """Get service statistics."""
    stats = await service.get_statistics()
    return StatisticsResponse(
        total_links=stats["total_links"],
        total_clicks=stats["total_clicks"],
        database=stats["database"],
        cache_enabled=stats["cache_enabled"],
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(service: ShortLinkService = Depends(get_service)):
    """Health check endpoint for monitoring."""
    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
