#!/usr/bin/env python3
"""
Server entry point for the link shortener.

Requests are served concurrently on the event loop (asyncpg pool and
redis.asyncio). With WORKERS > 1 uvicorn starts several processes, each
calling build_server_app and opening its own pools.

Usage:
    python app.py

Environment variables:
    STORE_BACKEND - 'postgres' (default) or 'memory'
    DATABASE_URL - PostgreSQL connection URL
    CREATE_TABLES - Set to 'true' to create the schema on startup
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    OWNER_HEADER - Header carrying the owner id from the auth proxy
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlinks.bootstrap import build_cache, build_service, build_store
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


def make_lifespan(config: Config, logger: logging.Logger):
    """Startup/shutdown hook creating the components inside the server's loop."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = build_store(config, logger=logger)
        cache = await build_cache(config, logger=logger)
        service = build_service(config, store, cache=cache, logger=logger)

        app.state.store = store
        app.state.cache = cache
        app.state.service = service
        logger.info(f"Link shortener ready ({store.backend_name} store)")

        try:
            yield
        finally:
            logger.info("Shutting down link shortener...")
            await service.close()

    return lifespan


def build_server_app() -> FastAPI:
    """Application factory used by uvicorn in every worker process."""
    config = load_config()
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    return create_app(
        store_instance=None,
        cache_instance=None,
        service_instance=None,
        config=config,
        lifespan=make_lifespan(config, logger),
    )


def main():
    """Run the server until interrupted."""
    config = load_config()
    logger = setup_logging(level=config.log_level)
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")
    logger.info(f"Listening on {config.host}:{config.port} with {config.workers} worker(s)")

    uvicorn.run(
        "app:build_server_app",
        factory=True,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
