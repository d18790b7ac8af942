"""
=============================================================================
ACCESS LOGGING MIDDLEWARE
=============================================================================

One structured log entry per request answered by the in-memory backend.

    TEXT FORMAT (default):
    ┌─────────────────────────────────────────────────────────────────────┐
    │ [18/Oct/2026:10:55:36 +0000] a1b2c3d4 "PUT app/heroes/7" 201 32 0.21ms│
    └─────────────────────────────────────────────────────────────────────┘

    JSON FORMAT:
    ┌─────────────────────────────────────────────────────────────────────┐
    │ {"request_id": "a1b2c3d4", "method": "PUT", "url": "app/heroes/7", │
    │  "status_code": 201, "content_length": 32, "duration_ms": 0.21, ...}│
    └─────────────────────────────────────────────────────────────────────┘

The duration covers handling only; the simulated latency is added later
by the service and is not part of it.

Entries go to the "in_memory_web_api.access" logger, so they can be
silenced or redirected on their own:

    logging.getLogger("in_memory_web_api.access").setLevel(logging.WARNING)

=============================================================================
"""

import json
import logging
import time
import uuid
from dataclasses import asdict, dataclass
from typing import Optional

from .base import Middleware, NextHandler
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


logger = logging.getLogger("in_memory_web_api.access")


@dataclass
class RequestLog:
    """Structured log entry for one request."""

    request_id: str
    method: str
    url: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        entry = asdict(self)
        entry["duration_ms"] = round(self.duration_ms, 2)
        return entry

    def to_text(self) -> str:
        return (
            f'[{self.timestamp}] {self.request_id} '
            f'"{self.method} {self.url}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


class LoggingMiddleware(Middleware):
    """
    Request logging middleware.

    Should be added first so it times, and logs, everything after it.

        service.use(LoggingMiddleware())                     # text lines
        service.use(LoggingMiddleware(log_format="json"))    # JSON lines
        service.use(LoggingMiddleware(skip_paths=["app/health"]))
    """

    def __init__(
        self,
        log_format: str = "text",
        include_request_id: bool = True,
        log_level: int = logging.INFO,
        skip_paths: Optional[list[str]] = None,
    ):
        """
        Args:
            log_format: "text" or "json"
            include_request_id: Add an X-Request-ID header to every response
            log_level: Level the entries are logged at
            skip_paths: Request URLs that are answered but not logged
        """
        self.log_format = log_format
        self.include_request_id = include_request_id
        self.log_level = log_level
        self.skip_paths = set(skip_paths or [])

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        # 8 hex chars are plenty to tell requests of one session apart
        request_id = uuid.uuid4().hex[:8]
        start_time = time.perf_counter()

        try:
            response = next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.url} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000

        if self.include_request_id:
            response.headers["X-Request-ID"] = request_id

        if request.url in self.skip_paths:
            return response

        log_entry = RequestLog(
            request_id=request_id,
            method=request.method,
            url=request.url,
            status_code=response.status_code,
            content_length=len(response.body),
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        if self.log_format == "json":
            logger.log(self.log_level, json.dumps(log_entry.to_dict()))
        else:
            logger.log(self.log_level, log_entry.to_text())

        return response
