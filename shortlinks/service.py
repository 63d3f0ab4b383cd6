"""Business logic service for the link shortener."""

import logging
from typing import Optional, Dict, Any, List

from .shortcode import ShortCodeGenerator
from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .database.models import ShortLink
from .common.logging_config import get_logger
from .common.validators import is_valid_url, is_valid_short_code
from .errors import (
    AuthenticationRequiredError,
    ConflictError,
    DuplicateCodeError,
    ExhaustedRetriesError,
    InvalidInputError,
    NotFoundError,
)


class ShortLinkService:
    """Service layer for short-code allocation, redirects and owner actions.

    The owner is always passed in by the caller; the service never reads
    request or session state.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        cache: Optional[RedisCache] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
        alias_min_length: int = 4,
        alias_max_length: int = 15,
    ):
        """Initialize service.

        Args:
            store: Link store instance
            cache: Optional redirect cache
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Attempts allowed to find a free generated code
            alias_min_length: Shortest accepted custom alias
            alias_max_length: Longest accepted custom alias
        """
        if max_collision_retries < 1:
            raise ValueError("max_collision_retries must be at least 1")
        self.store = store
        self.cache = cache
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or get_logger(__name__)
        self.max_collision_retries = max_collision_retries
        self.alias_min_length = alias_min_length
        self.alias_max_length = alias_max_length

    async def create_link(
        self,
        destination: Optional[str],
        alias: Optional[str] = None,
        owner: Optional[str] = None,
    ) -> ShortLink:
        """Create a new short link.

        Args:
            destination: The URL to redirect to
            alias: Optional custom short code
            owner: Optional owner identifier; None for anonymous links

        Returns:
            The stored link

        Raises:
            InvalidInputError: Missing/malformed destination or malformed alias
            ConflictError: Alias already in use
            ExhaustedRetriesError: No free generated code within the attempt bound
        """
        is_valid, error = is_valid_url(destination)
        if not is_valid:
            raise InvalidInputError(error)

        if alias:
            link = await self._create_with_alias(destination, alias, owner)
        else:
            link = await self._create_with_generated_code(destination, owner)

        self.logger.info(f"Created short link: {link.code} -> {destination} (owner={owner})")
        return link

    async def _create_with_alias(self, destination: str, alias: str, owner: Optional[str]) -> ShortLink:
        is_valid, error = is_valid_short_code(
            alias,
            min_length=self.alias_min_length,
            max_length=self.alias_max_length,
        )
        if not is_valid:
            raise InvalidInputError(error)

        # The store's unique constraint is authoritative; this check only
        # avoids a doomed insert.
        if await self.store.code_exists(alias):
            raise ConflictError(f"Alias '{alias}' is already in use")

        try:
            return await self.store.insert_link(alias, destination, owner=owner)
        except DuplicateCodeError:
            raise ConflictError(f"Alias '{alias}' is already in use")

    async def _create_with_generated_code(self, destination: str, owner: Optional[str]) -> ShortLink:
        for attempt in range(1, self.max_collision_retries + 1):
            code = self.generator.generate()

            if await self.store.code_exists(code):
                self.logger.debug(f"Generated code collided (attempt {attempt}): {code}")
                continue

            try:
                link = await self.store.insert_link(code, destination, owner=owner)
            except DuplicateCodeError:
                self.logger.debug(f"Generated code taken concurrently (attempt {attempt}): {code}")
                continue

            if attempt > 1:
                self.logger.debug(f"Generated code after {attempt} attempts: {code}")
            return link

        self.logger.error(
            f"Unable to generate unique short code after {self.max_collision_retries} attempts"
        )
        raise ExhaustedRetriesError()

    async def resolve(self, code: str) -> ShortLink:
        """Look up the link for a code.

        Raises:
            NotFoundError: If the code is unknown
        """
        link = await self.store.get_link(code)
        if link is None:
            self.logger.warning(f"Short code not found: {code}")
            raise NotFoundError(f"Short code '{code}' not found")
        self.logger.debug(f"Resolved {code} -> {link.destination}")
        return link

    async def resolve_destination(self, code: str) -> str:
        """Destination for a redirect, served from the cache when possible.

        Raises:
            NotFoundError: If the code is unknown
        """
        cache_key = None
        if self.cache:
            cache_key = self.cache.get_cache_key(code)
            cached = await self.cache.get(cache_key)
            if cached:
                self.logger.debug(f"Cache hit for {code}")
                return cached

        link = await self.resolve(code)

        if cache_key and await self.cache.set(cache_key, link.destination):
            # A delete between the lookup and the set evicts before we write
            if not await self.store.code_exists(code):
                await self.cache.delete(cache_key)
        return link.destination

    async def record_click(self, code: str) -> bool:
        """Add one click to a link, best-effort.

        Never raises: a failed write is logged and reported as False so
        that accounting can never break a redirect.
        """
        try:
            updated = await self.store.increment_click_count(code)
        except Exception:
            self.logger.exception(f"Failed to increment click count for {code}")
            return False

        if not updated:
            self.logger.warning(f"Click for unknown short code: {code}")
        return updated

    async def get_link(self, code: str) -> ShortLink:
        """Get complete information about a link.

        Raises:
            NotFoundError: If the code is unknown
        """
        return await self.resolve(code)

    async def list_links(self, owner: Optional[str], limit: int = 100) -> List[ShortLink]:
        """List an owner's links, newest first.

        Raises:
            AuthenticationRequiredError: If no owner is given
        """
        if not owner:
            raise AuthenticationRequiredError()
        return await self.store.list_links_by_owner(owner, limit=limit)

    async def delete_link(self, code: str, owner: Optional[str]) -> None:
        """Delete a link owned by owner.

        Raises:
            AuthenticationRequiredError: If no owner is given
            NotFoundError: If the link is absent or belongs to someone else
        """
        if not owner:
            raise AuthenticationRequiredError()

        deleted = await self.store.delete_link(code, owner)
        if not deleted:
            self.logger.warning(f"Delete refused for {code} by {owner}: not found or not owner")
            raise NotFoundError("Short URL not found or you do not have permission to delete it")

        if self.cache:
            await self.cache.delete(self.cache.get_cache_key(code))

        self.logger.info(f"Deleted short link: {code} (owner={owner})")

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics."""
        store_stats = await self.store.get_statistics()

        return {
            **store_stats,
            "cache_enabled": self.cache is not None and self.cache.enabled,
        }

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check."""
        db_healthy = await self.store.health_check()

        cache_healthy = True
        if self.cache:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
        if self.cache:
            await self.cache.close()
