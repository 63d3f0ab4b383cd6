"""Wiring of store, cache and service from configuration."""

import logging
from typing import Optional

from .common.logging_config import get_logger
from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .database.memory import InMemoryLinkStore
from .database.postgres import PostgresLinkStore
from .service import ShortLinkService
from .shortcode import ShortCodeGenerator


def build_store(config, logger: Optional[logging.Logger] = None) -> LinkStoreBase:
    """Create the link store selected by ``config.store_backend``."""
    logger = logger or get_logger(__name__)

    if config.store_backend == "memory":
        logger.warning("Using in-memory link store; links are lost on restart")
        return InMemoryLinkStore(logger=logger)

    logger.info(f"Using PostgreSQL link store at {config.database_url}")
    return PostgresLinkStore(
        db_config=config.database_url,
        pool_max_size=config.db_pool_max_size,
        create_tables=config.create_tables,
        logger=logger,
    )


async def build_cache(config, logger: Optional[logging.Logger] = None) -> Optional[RedisCache]:
    """Create and connect the redirect cache, or None when Redis is not configured."""
    logger = logger or get_logger(__name__)

    if not config.redis_url:
        logger.info("Redis caching disabled")
        return None

    logger.info(f"Connecting to Redis at {config.redis_url}")
    cache = RedisCache(
        redis_url=config.redis_url,
        ttl_seconds=config.cache_ttl_seconds,
        logger=logger,
    )
    await cache.connect()
    return cache


def build_service(
    config,
    store: LinkStoreBase,
    cache: Optional[RedisCache] = None,
    logger: Optional[logging.Logger] = None,
) -> ShortLinkService:
    """Create the service with the configured code generator and limits."""
    generator = ShortCodeGenerator(
        default_length=config.short_code_length,
        strategy=config.short_code_strategy,
    )
    return ShortLinkService(
        store=store,
        cache=cache,
        short_code_generator=generator,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
        alias_min_length=config.alias_min_length,
        alias_max_length=config.alias_max_length,
    )
