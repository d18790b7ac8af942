"""
Request handlers.

The in-memory backend has one: CrudHandler, which answers
GET/POST/PUT/DELETE against the collection store.
"""

from .crud import CrudHandler, RequestInfo, SUPPORTED_METHODS

__all__ = ["CrudHandler", "RequestInfo", "SUPPORTED_METHODS"]
