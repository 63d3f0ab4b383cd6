"""Redirect route and plain health check."""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from shortlinks.service import ShortLinkService
from ..dependencies import get_service

router = APIRouter()


@router.get("/health", include_in_schema=False)
async def health_check_web(service: ShortLinkService = Depends(get_service)):
    """Health check endpoint (simple version for load balancers)."""
    health = await service.health_check()

    if not health["overall"]:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy",
        )
    return {"status": "healthy"}


# Registered last: matches every single-segment path
@router.get("/{code}", include_in_schema=False)
async def redirect_to_destination(
    request: Request,
    code: str,
    background_tasks: BackgroundTasks,
    service: ShortLinkService = Depends(get_service),
):
    """Redirect to the destination; the click is counted after the response."""
    destination = await service.resolve_destination(code)

    background_tasks.add_task(service.record_click, code)

    return RedirectResponse(
        url=destination,
        status_code=request.app.state.config.redirect_status_code,
    )
