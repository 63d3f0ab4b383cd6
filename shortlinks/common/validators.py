"""Validation utilities for the link service.

Validators return ``(is_valid, error_message)`` instead of raising; the
service decides what a failure means.
"""

import re
from urllib.parse import urlparse
from typing import Tuple

MAX_URL_LENGTH = 2048

SHORT_CODE_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")

# Single-segment paths that would shadow an app route
RESERVED_WORDS = frozenset({"api", "health"})


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a destination URL.
    
    Args:
        url: The URL to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "Destination URL is required"
    
    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"
    
    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"
    
    if result.scheme not in ("http", "https"):
        return False, "URL must use http or https protocol"
    
    if not result.netloc:
        return False, "URL must have a valid domain"
    
    return True, ""


def is_valid_short_code(short_code: str, min_length: int = 4, max_length: int = 15) -> Tuple[bool, str]:
    """Validate a user-supplied alias.
    
    Args:
        short_code: The alias to validate
        min_length: Minimum length
        max_length: Maximum length
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"
    
    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"
    
    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"
    
    if not SHORT_CODE_PATTERN.fullmatch(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"
    
    if short_code in RESERVED_WORDS:
        return False, f"'{short_code}' is a reserved word and cannot be used"
    
    return True, ""
