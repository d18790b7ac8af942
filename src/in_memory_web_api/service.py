"""
=============================================================================
IN-MEMORY BACKEND SERVICE
=============================================================================

The public face of the package: an HTTP-client lookalike whose requests
never leave the process.

=============================================================================
ARCHITECTURE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                   InMemoryBackendService                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   await service.put("app/heroes/7", body='{"id": 7, ...}')          │
    │        │                                                             │
    │        ▼                                                             │
    │   build_request()           body encoding, may raise                │
    │        │                    InvalidRequestBody                      │
    │        ▼                                                             │
    │   ┌─────────────────────────────────────────────────────────────┐   │
    │   │  MIDDLEWARE PIPELINE  (e.g. LoggingMiddleware)              │   │
    │   │     ┌───────────────────────────────────────────────────┐   │   │
    │   │     │  CrudHandler ──► CollectionStore                  │   │   │
    │   │     └───────────────────────────────────────────────────┘   │   │
    │   └─────────────────────────────────────────────────────────────┘   │
    │        │                    unexpected exception → 500              │
    │        ▼                                                             │
    │   LatencySimulator.deliver()    await config.delay ms               │
    │        │                                                             │
    │        ▼                                                             │
    │   HTTPResponse                                                       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

All work before the delay is synchronous, so each request is applied to
the database in full before any other request can run.

=============================================================================
USAGE
=============================================================================

    def seed():
        return {"heroes": [{"id": 1, "name": "Windstorm"}]}

    http = InMemoryBackendService(seed, BackendConfig(delay=200))

    response = await http.get("app/heroes")
    response.status_code           # 200
    response.json()["data"]        # [{"id": 1, "name": "Windstorm"}]

=============================================================================
"""

import logging
from typing import Any, Callable, Dict, Optional

from .config import BackendConfig
from .core.latency import LatencySimulator
from .core.store import CollectionStore, SeedFactory
from .handlers.crud import CrudHandler
from .http.request import HTTPRequest, build_request
from .http.response import HTTPResponse, internal_error
from .middleware.base import Middleware, MiddlewarePipeline


logger = logging.getLogger(__name__)


Headers = Optional[Dict[str, str]]


class InMemoryBackendService:
    """
    An HTTP client backed by in-memory collections.

    Args:
        seed_data: Zero-argument callable returning {collection: [records]}.
                   Called at construction and on every reset_db().
        config: Behaviour and URL settings; defaults apply when omitted.

    Raises:
        TypeError: If seed_data is not callable.
        ValueError: If the configuration is invalid.
    """

    def __init__(self, seed_data: SeedFactory, config: Optional[BackendConfig] = None):
        self.config = config or BackendConfig()
        self.config.validate()

        self._store = CollectionStore(seed_data)
        self._crud = CrudHandler(self._store, self.config)
        self._latency = LatencySimulator(self.config.delay)
        self._middleware = MiddlewarePipeline()

        # middleware.wrap(crud), rebuilt whenever middleware is added
        self._handler: Callable[[HTTPRequest], HTTPResponse] = self._crud

    @property
    def store(self) -> CollectionStore:
        """The database behind this service."""
        return self._store

    def reset_db(self) -> None:
        """Discard every change and go back to the seed data."""
        self._store.reset()
        logger.debug("Database reset to seed data")

    def use(self, middleware: Middleware) -> "InMemoryBackendService":
        """
        Add middleware around the CRUD handler.

        Executed in the order added. Returns self for chaining.
        """
        self._middleware.add(middleware)
        self._handler = self._middleware.wrap(self._crud)
        return self

    # =========================================================================
    # CLIENT API
    # =========================================================================

    async def get(self, url: str, headers: Headers = None) -> HTTPResponse:
        """GET a whole collection ("app/heroes") or one record ("app/heroes/7")."""
        return await self.send(build_request("GET", url, headers))

    async def post(
        self,
        url: str,
        headers: Headers = None,
        body: Any = None,
        encoding: Optional[str] = None,
    ) -> HTTPResponse:
        """
        POST a record to create it, or to replace the one with its id.

        Raises:
            InvalidRequestBody: If body is not str, bytes, a list of ints or a dict.
        """
        return await self.send(build_request("POST", url, headers, body, encoding))

    async def put(
        self,
        url: str,
        headers: Headers = None,
        body: Any = None,
        encoding: Optional[str] = None,
    ) -> HTTPResponse:
        """
        PUT a record at the id in the URL.

        Raises:
            InvalidRequestBody: If body is not str, bytes, a list of ints or a dict.
        """
        return await self.send(build_request("PUT", url, headers, body, encoding))

    async def delete(self, url: str, headers: Headers = None) -> HTTPResponse:
        """DELETE the record at the id in the URL."""
        return await self.send(build_request("DELETE", url, headers))

    async def send(self, request: HTTPRequest) -> HTTPResponse:
        """Answer an already-built request after the configured delay."""
        response = self.handle(request)
        return await self._latency.deliver(response)

    # =========================================================================
    # SYNCHRONOUS HANDLING
    # =========================================================================

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Run `request` through middleware and the CRUD handler, no delay.

        Errors never escape: the handler answers with error responses, and
        anything it raises unexpectedly becomes a logged 500.
        """
        try:
            return self._handler(request)
        except Exception as e:
            logger.exception(f"Handler error for {request.method} {request.url}: {e}")
            response = internal_error()
            response.request = request
            return response
