"""
Simulated network latency.

Responses are computed immediately; only their delivery is deferred, so
the database has already changed by the time the caller's await starts
waiting.
"""

import asyncio
import logging

from ..http.response import HTTPResponse


logger = logging.getLogger(__name__)


class LatencySimulator:
    """Delays delivery of a finished response by a fixed number of milliseconds."""

    def __init__(self, delay_ms: float = 0):
        self.delay_ms = delay_ms

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000

    async def deliver(self, response: HTTPResponse) -> HTTPResponse:
        """Wait out the configured delay, then return `response` unchanged."""
        if self.delay_ms > 0:
            logger.debug(f"Delaying response by {self.delay_ms}ms")
        # sleep(0) still yields to the event loop, like a zero-length timer
        await asyncio.sleep(self.delay_seconds)
        return response
