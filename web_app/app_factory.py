"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shortlinks import __version__
from .api import api_router
from .web import web_router
from .middleware import AccessLogMiddleware, ProxyContextMiddleware, register_exception_handlers


def _install_middleware(app: FastAPI, config) -> None:
    # Last added is outermost
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(ProxyContextMiddleware, owner_header=config.owner_header)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )


def create_app(
    store_instance,
    cache_instance,
    service_instance,
    config,
    lifespan=None,
) -> FastAPI:
    """Build the web app around already-created components.
    
    Passing None for the instances is allowed when ``lifespan`` fills in
    ``app.state`` at startup.
    """
    app = FastAPI(
        title="Short Links",
        description="URL shortening service",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    
    app.state.store = store_instance
    app.state.cache = cache_instance
    app.state.service = service_instance
    app.state.config = config
    
    _install_middleware(app, config)
    register_exception_handlers(app)
    
    app.include_router(api_router, prefix="/api", tags=["API"])
    # The redirect route matches any single path segment, so it goes last
    app.include_router(web_router, tags=["Web"])
    
    return app
