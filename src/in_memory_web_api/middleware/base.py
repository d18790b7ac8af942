"""
=============================================================================
MIDDLEWARE INTERFACE
=============================================================================

Middleware wraps the CRUD handler to add cross-cutting behaviour (access
logging, extra headers) without touching the handler itself.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   Request ──────────────────────────────────────────────►            │
    │                                                                      │
    │   ┌──────────┐    ┌──────────┐    ┌──────────────┐                   │
    │   │ Logging  │───►│  Other   │───►│ CrudHandler  │                   │
    │   │    MW    │    │    MW    │    │              │                   │
    │   └──────────┘    └──────────┘    └──────────────┘                   │
    │                                                                      │
    │   ◄────────────────────────────────────────────── Response           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Each middleware either calls next(request) to continue, or returns its own
response to short-circuit. The chain runs synchronously; the simulated
latency is applied by the service after the whole chain has returned.

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterator, List
import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


logger = logging.getLogger(__name__)


# The next middleware, or the final handler
NextHandler = Callable[[HTTPRequest], HTTPResponse]


class Middleware(ABC):
    """
    Abstract base class for middleware.

        class StampMiddleware(Middleware):
            def __call__(self, request, next):
                response = next(request)
                response.set_header("X-Backend", "in-memory")
                return response
    """

    @abstractmethod
    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        """
        Process the request.

        Args:
            request: The request on its way to the handler
            next: The rest of the chain; call it to continue

        Returns:
            The response from next(), possibly modified, or a new one
        """

    @property
    def name(self) -> str:
        """Get the middleware name for logging."""
        return self.__class__.__name__


class MiddlewarePipeline:
    """
    Chains middleware around a final handler.

    First added = outermost:

        pipeline.add(LoggingMiddleware())   # sees every request first
        pipeline.add(StampMiddleware())
        handler = pipeline.wrap(crud_handler)
    """

    def __init__(self):
        self._middleware: List[Middleware] = []

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        """Append middleware. Returns self for chaining."""
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.name}")
        return self

    def wrap(self, handler: NextHandler) -> NextHandler:
        """
        Wrap `handler` with every middleware in the pipeline.

        Wrapping runs in reverse so the first-added middleware ends up
        outermost: [A, B] → A(B(handler)).
        """
        current = handler
        for middleware in reversed(self._middleware):
            current = self._create_wrapped_handler(middleware, current)
        return current

    @staticmethod
    def _create_wrapped_handler(middleware: Middleware, next_handler: NextHandler) -> NextHandler:
        def wrapped(request: HTTPRequest) -> HTTPResponse:
            return middleware(request, next_handler)
        return wrapped

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self) -> Iterator[Middleware]:
        return iter(self._middleware)
