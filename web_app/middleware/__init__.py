"""Middleware for the link shortener web app."""

from .access_log import AccessLogMiddleware
from .errors import register_exception_handlers
from .proxy import ProxyContextMiddleware

__all__ = ["AccessLogMiddleware", "ProxyContextMiddleware", "register_exception_handlers"]
