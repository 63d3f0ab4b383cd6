"""Pydantic schemas for API requests and responses.

JSON field names are camelCase; Python attributes stay snake_case.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional
from datetime import datetime


class CamelModel(BaseModel):
    """Base for response bodies serialized with camelCase keys."""
    
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShortenRequest(BaseModel):
    """Request to shorten a URL.
    
    Destination presence and format are checked by the service so that a
    missing destination is reported like any other invalid input.
    """
    
    destination: Optional[str] = Field(
        None,
        description="The URL to redirect to",
        validation_alias=AliasChoices("destination", "originalUrl", "url"),
    )
    alias: Optional[str] = Field(
        None,
        description="Optional custom short code (4-15 letters, digits, '-' or '_')",
        validation_alias=AliasChoices("alias", "customAlias"),
    )
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"destination": "https://example.com/very/long/path/to/resource"},
                {"destination": "https://example.com", "alias": "my-link"},
            ]
        }
    }


class ShortLinkResponse(CamelModel):
    """A created or listed short link."""
    
    code: str = Field(..., description="The short code")
    destination: str = Field(..., description="The destination URL")
    click_count: int = Field(..., description="Successful redirects so far")
    created_at: datetime = Field(..., description="Creation timestamp")
    short_url: str = Field(..., description="The complete short URL")


class LinkInfoResponse(CamelModel):
    """Response with link information."""
    
    code: str
    destination: str
    click_count: int
    created_at: datetime
    last_accessed: Optional[datetime] = None


class LinkListResponse(CamelModel):
    """An owner's links, newest first."""
    
    items: List[ShortLinkResponse]
    count: int


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""
    
    error: str = Field(..., description="Error message")
    detail: Optional[Any] = Field(None, description="Detailed error information")


class StatisticsResponse(CamelModel):
    """Statistics response."""
    
    total_links: int
    total_clicks: int
    database: str
    cache_enabled: bool
