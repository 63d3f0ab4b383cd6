"""
Error classes for the link service.

Each error carries the HTTP status the web layer answers with, so the API
can translate service failures without inspecting messages.
"""

from typing import Optional, Dict, Any


class ShortLinkError(Exception):
    """
    Base error class.
    
    Attributes:
        status_code: HTTP status code (default: 500)
        message: Error message (default: "Internal server error")
        details: Optional additional error details
    """
    status_code: int = 500
    message: str = "Internal server error"
    
    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize error.
        
        Args:
            message: Error message (overrides default)
            details: Optional additional error details
        """
        self.message = message or self.message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputError(ShortLinkError):
    """400 Missing destination or malformed alias."""
    status_code = 400
    message = "Invalid input"


class AuthenticationRequiredError(ShortLinkError):
    """401 Owner-scoped operation called without an owner."""
    status_code = 401
    message = "Please log in to access this resource"


class NotFoundError(ShortLinkError):
    """404 Unknown short code, or a link the caller does not own."""
    status_code = 404
    message = "Short URL not found"


class ConflictError(ShortLinkError):
    """409 Alias already in use."""
    status_code = 409
    message = "This alias is already in use"


class ExhaustedRetriesError(ShortLinkError):
    """500 No free short code found within the attempt bound."""
    status_code = 500
    message = "Could not generate a unique short code, please try again"


class DuplicateCodeError(Exception):
    """Raised by a link store when its unique constraint rejects an insert."""
    
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Short code '{code}' already exists")
