"""FastAPI dependencies shared by the routers."""

from typing import Optional

from fastapi import Request

from shortlinks.common.proxy import ProxyContext, public_base_url, read_proxy_context, short_url
from shortlinks.service import ShortLinkService


def get_service(request: Request) -> ShortLinkService:
    return request.app.state.service


def get_proxy_context(request: Request) -> ProxyContext:
    context = getattr(request.state, "proxy", None)
    if context is None:
        context = read_proxy_context(request.headers, request.app.state.config.owner_header)
    return context


def get_owner(request: Request) -> Optional[str]:
    """Owner id forwarded by the authenticating proxy; None when anonymous."""
    return get_proxy_context(request).owner


def short_url_for(request: Request, code: str) -> str:
    """Absolute short URL for code as seen by this request's client."""
    config = request.app.state.config
    base_url = public_base_url(
        get_proxy_context(request),
        fallback=config.base_url,
        scheme=request.url.scheme,
        host=request.headers.get("host"),
    )
    return short_url(base_url, code, config.path_prefix)
