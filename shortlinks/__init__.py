"""Core logic for the link shortener."""

from .shortcode import ShortCodeGenerator
from .service import ShortLinkService

__version__ = "1.0.0"

__all__ = ["ShortCodeGenerator", "ShortLinkService", "__version__"]
