"""Middleware reading the reverse proxy's forwarded headers."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortlinks.common.proxy import read_proxy_context


class ProxyContextMiddleware(BaseHTTPMiddleware):
    """Attach a ProxyContext to ``request.state.proxy``.
    
    Route dependencies read the owner and public URL from it instead of
    parsing headers themselves.
    """
    
    def __init__(self, app, owner_header: str = "X-Forwarded-User"):
        super().__init__(app)
        self.owner_header = owner_header
    
    async def dispatch(self, request: Request, call_next):
        request.state.proxy = read_proxy_context(request.headers, self.owner_header)
        return await call_next(request)
