"""
Middleware for the in-memory backend.

    from in_memory_web_api.middleware import LoggingMiddleware

    service.use(LoggingMiddleware())
"""

from .base import Middleware, MiddlewarePipeline, NextHandler
from .logging import LoggingMiddleware, RequestLog

__all__ = [
    "Middleware",
    "MiddlewarePipeline",
    "NextHandler",
    "LoggingMiddleware",
    "RequestLog",
]
