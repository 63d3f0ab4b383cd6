"""Access logging middleware."""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log one line per request once the response is ready.
    
    The line carries the forwarded client address and owner when the
    proxy supplied them. Server errors are logged at WARNING.
    """
    
    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("shortlinks.web.access")
    
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        
        proxy = getattr(request.state, "proxy", None)
        client = (proxy and proxy.client) or (request.client.host if request.client else "-")
        owner = (proxy and proxy.owner) or "-"
        
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            f"{client} {owner} \"{request.method} {request.url.path}\" "
            f"{response.status_code} {elapsed_ms:.1f}ms",
        )
        
        response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}ms"
        return response
