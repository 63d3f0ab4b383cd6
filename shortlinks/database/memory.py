"""In-process link store, for development and tests."""

import asyncio
import logging
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone

from ..common.logging_config import get_logger
from ..errors import DuplicateCodeError
from .base import LinkStoreBase
from .models import ShortLink


class InMemoryLinkStore(LinkStoreBase):
    """Link store backed by a dict guarded by an asyncio lock.
    
    Data lives only as long as the process.
    """
    
    backend_name = "memory"
    
    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or get_logger(__name__)
        self._links: Dict[str, ShortLink] = {}
        self._lock = asyncio.Lock()
    
    async def insert_link(
        self,
        code: str,
        destination: str,
        owner: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> ShortLink:
        if created_at is None:
            created_at = datetime.now(timezone.utc)
        
        async with self._lock:
            if code in self._links:
                raise DuplicateCodeError(code)
            link = ShortLink(
                code=code,
                destination=destination,
                owner=owner,
                created_at=created_at,
            )
            self._links[code] = link
        
        self.logger.debug(f"Stored link: {code} -> {destination}")
        return link
    
    async def get_link(self, code: str) -> Optional[ShortLink]:
        return self._links.get(code)
    
    async def code_exists(self, code: str) -> bool:
        return code in self._links
    
    async def increment_click_count(self, code: str) -> bool:
        async with self._lock:
            link = self._links.get(code)
            if link is None:
                return False
            self._links[code] = link.with_click(datetime.now(timezone.utc))
        return True
    
    async def delete_link(self, code: str, owner: str) -> bool:
        async with self._lock:
            link = self._links.get(code)
            if link is None or not link.is_owned_by(owner):
                return False
            del self._links[code]
        return True
    
    async def list_links_by_owner(self, owner: str, limit: int = 100) -> List[ShortLink]:
        # Newest first; equal timestamps keep reverse insertion order
        links = [link for link in reversed(self._links.values()) if link.is_owned_by(owner)]
        links.sort(key=lambda link: link.created_at, reverse=True)
        return links[:limit]
    
    async def get_statistics(self) -> Dict[str, Any]:
        links = list(self._links.values())
        return {
            "total_links": len(links),
            "total_clicks": sum(link.click_count for link in links),
            "database": self.backend_name,
        }
    
    async def health_check(self) -> bool:
        return True
    
    async def close(self) -> None:
        self._links.clear()
