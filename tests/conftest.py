"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient

from config import Config
from shortlinks.common.logging_config import setup_logging
from shortlinks.database.cache import RedisCache
from shortlinks.database.memory import InMemoryLinkStore
from shortlinks.errors import DuplicateCodeError
from shortlinks.service import ShortLinkService
from shortlinks.shortcode import ShortCodeGenerator
from web_app import create_app


class FailingClickStore(InMemoryLinkStore):
    """Store whose click counter write always fails."""
    
    async def increment_click_count(self, code: str) -> bool:
        raise ConnectionError("database went away")


class AlwaysTakenStore(InMemoryLinkStore):
    """Store that reports every candidate code as taken."""
    
    async def code_exists(self, code: str) -> bool:
        return True


class RacingStore(InMemoryLinkStore):
    """Store where the first `losses` inserts lose a race to another writer."""
    
    def __init__(self, losses: int = 1, **kwargs):
        super().__init__(**kwargs)
        self.losses = losses
        self.insert_attempts = 0
    
    async def insert_link(self, code, destination, owner=None, created_at=None):
        self.insert_attempts += 1
        if self.insert_attempts <= self.losses:
            raise DuplicateCodeError(code)
        return await super().insert_link(code, destination, owner=owner, created_at=created_at)


class DictCache(RedisCache):
    """RedisCache stand-in keeping entries in a dict."""
    
    def __init__(self):
        super().__init__(redis_url="redis://unused", ttl_seconds=60)
        self.data = {}
    
    async def connect(self) -> None:
        pass
    
    async def get(self, key):
        return self.data.get(key)
    
    async def set(self, key, value, ttl=None):
        self.data[key] = value
        return True
    
    async def delete(self, key):
        return self.data.pop(key, None) is not None
    
    async def ping(self) -> bool:
        return True
    
    async def close(self) -> None:
        self.data.clear()


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger) -> InMemoryLinkStore:
    """In-process link store."""
    return InMemoryLinkStore(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=8)


@pytest.fixture
def service(store, short_code_generator, logger) -> ShortLinkService:
    """Create service instance."""
    return ShortLinkService(
        store=store,
        cache=None,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config() -> Config:
    """Test configuration."""
    return Config(store_backend="memory", base_url="http://testserver")


def make_app(service: ShortLinkService, config: Config):
    """Build the FastAPI app around an existing service."""
    return create_app(
        store_instance=service.store,
        cache_instance=service.cache,
        service_instance=service,
        config=config,
    )


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return make_app(service, config)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
