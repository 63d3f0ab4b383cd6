"""Data models for the link store."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ShortLink:
    """A short code mapped to its destination."""
    
    code: str
    destination: str
    created_at: datetime
    owner: Optional[str] = None
    click_count: int = 0
    last_accessed: Optional[datetime] = None
    
    def with_click(self, accessed_at: datetime) -> "ShortLink":
        """Copy with one more click recorded."""
        return replace(self, click_count=self.click_count + 1, last_accessed=accessed_at)
    
    def is_owned_by(self, owner: Optional[str]) -> bool:
        """Anonymous links have no owner and match nobody."""
        return owner is not None and self.owner == owner
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "destination": self.destination,
            "owner": self.owner,
            "click_count": self.click_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_accessed": self.last_accessed.isoformat() if self.last_accessed else None,
        }
    
    @classmethod
    def from_record(cls, data) -> "ShortLink":
        """Create from a database row or dictionary."""
        data = dict(data)
        created_at = data["created_at"]
        if not isinstance(created_at, datetime):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            code=data["code"],
            destination=data["destination"],
            created_at=created_at,
            owner=data.get("owner"),
            click_count=data.get("click_count") or 0,
            last_accessed=data.get("last_accessed"),
        )
