"""
=============================================================================
BACKEND CONFIGURATION
=============================================================================

All the knobs of the in-memory backend in one dataclass.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m in_memory_web_api --delay 500                   │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── IN_MEMORY_API_DELAY=500 python -m in_memory_web_api       │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    └─────────────────────────────────────────────────────────────────────┘

In tests and application code the dataclass is usually built directly:

    service = InMemoryBackendService(seed, BackendConfig(delete_404=True))

=============================================================================
"""

import os
from dataclasses import dataclass


LOG_FORMATS = ("text", "json")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class BackendConfig:
    """
    Configuration for an InMemoryBackendService.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    BEHAVIOUR
    - delay, delete_404

    URL INTERPRETATION
    - host, root_path

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # BEHAVIOUR
    # ─────────────────────────────────────────────────────────────────────

    delay: float = 0
    """
    Simulated latency in milliseconds before each response is delivered.
    0 delivers immediately (on the next event loop turn).
    """

    delete_404: bool = False
    """
    Answer 404 when DELETE targets an id that does not exist.
    False (the default) treats deleting a missing record as success (204).
    """

    # ─────────────────────────────────────────────────────────────────────
    # URL INTERPRETATION
    # ─────────────────────────────────────────────────────────────────────

    host: str = "localhost"
    """
    The host this backend pretends to be, port included ("localhost:8080").
    URLs for any other host are assumed to address a same-shaped API.
    """

    root_path: str = "/"
    """
    Path prefix in front of {base}/{collection}/{id}.
    With "/api/", the URL /api/app/heroes addresses the heroes collection.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level used by the command-line driver."""

    log_format: str = "text"
    """Access log format: 'text' (one line) or 'json'."""

    @classmethod
    def from_env(cls) -> "BackendConfig":
        """
        Create configuration from environment variables.

        IN_MEMORY_API_DELAY       Latency in ms (default: 0)
        IN_MEMORY_API_DELETE_404  "true"/"1" to 404 on missing deletes
        IN_MEMORY_API_HOST        Backend host (default: localhost)
        IN_MEMORY_API_ROOT_PATH   Path prefix (default: /)
        IN_MEMORY_API_LOG_LEVEL   Logging level (default: INFO)
        IN_MEMORY_API_LOG_FORMAT  text or json (default: text)
        """
        return cls(
            delay=float(os.getenv("IN_MEMORY_API_DELAY", "0")),
            delete_404=_env_flag("IN_MEMORY_API_DELETE_404"),
            host=os.getenv("IN_MEMORY_API_HOST", "localhost"),
            root_path=os.getenv("IN_MEMORY_API_ROOT_PATH", "/"),
            log_level=os.getenv("IN_MEMORY_API_LOG_LEVEL", "INFO"),
            log_format=os.getenv("IN_MEMORY_API_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called when the service is constructed, so a bad value fails
        before the first request rather than during it.
        """
        if self.delay < 0:
            raise ValueError(f"Invalid delay: {self.delay}. Must be >= 0.")

        if not self.root_path.startswith("/"):
            raise ValueError(f"root_path must start with '/', got {self.root_path!r}")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
