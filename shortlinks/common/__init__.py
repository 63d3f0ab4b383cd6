"""Common utilities for the link service."""

from .validators import is_valid_url, is_valid_short_code
from .proxy import ProxyContext, read_proxy_context, public_base_url, short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "ProxyContext",
    "read_proxy_context",
    "public_base_url",
    "short_url",
    "setup_logging",
    "get_logger",
]
