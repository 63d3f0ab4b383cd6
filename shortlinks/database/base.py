"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from datetime import datetime

from .models import ShortLink


class LinkStoreBase(ABC):
    """Abstract base class for link store operations.
    
    Implementations must reject a duplicate code at insert time
    (raise DuplicateCodeError) and increment click counts atomically.
    """
    
    backend_name = "unknown"
    
    def __init__(self, db_config: str):
        """Initialize store.
        
        Args:
            db_config: Database connection string
        """
        self.db_config = db_config
    
    @abstractmethod
    async def insert_link(
        self,
        code: str,
        destination: str,
        owner: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> ShortLink:
        """Insert a new link.
        
        Args:
            code: The short code to use
            destination: The destination URL
            owner: Optional owner identifier
            created_at: Optional creation timestamp (defaults to now)
            
        Returns:
            The stored link
            
        Raises:
            DuplicateCodeError: If the code is already taken
        """
    
    @abstractmethod
    async def get_link(self, code: str) -> Optional[ShortLink]:
        """Get the link for a short code, or None if not found."""
    
    @abstractmethod
    async def code_exists(self, code: str) -> bool:
        """Check if a short code is already taken."""
    
    @abstractmethod
    async def increment_click_count(self, code: str) -> bool:
        """Atomically add one click to a link.
        
        Returns:
            True if a link was updated, False if the code is unknown
        """
    
    @abstractmethod
    async def delete_link(self, code: str, owner: str) -> bool:
        """Delete a link if it belongs to owner.
        
        Returns:
            True if deleted, False if not found or not owned by owner
        """
    
    @abstractmethod
    async def list_links_by_owner(self, owner: str, limit: int = 100) -> List[ShortLink]:
        """List an owner's links, newest first."""
    
    @abstractmethod
    async def get_statistics(self) -> Dict[str, Any]:
        """Get store statistics (total_links, total_clicks)."""
    
    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable."""
    
    async def ensure_schema(self) -> None:
        """Create tables and constraints if the backend needs them."""
    
    @abstractmethod
    async def close(self) -> None:
        """Close connections."""
