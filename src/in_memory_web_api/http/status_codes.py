"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes an in-memory backend answers with, plus reason phrases.

=============================================================================
WHICH CODE WHEN?
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CRUD OUTCOMES → STATUS CODES                     │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   GET    collection / item found            → 200 OK                 │
    │   POST   new item appended                  → 201 Created            │
    │   POST   existing item replaced             → 204 No Content         │
    │   PUT    new item appended                  → 201 Created            │
    │   PUT    existing item replaced             → 204 No Content         │
    │   DELETE (item removed or already gone)     → 204 No Content         │
    │                                                                      │
    │   PUT    body id differs from URL id        → 400 Bad Request        │
    │   GET    unknown id / collection            → 404 Not Found          │
    │   PUT/DELETE without an id in the URL       → 404 Not Found          │
    │   PATCH, HEAD, ... (unsupported)            → 405 Method Not Allowed │
    │   handler crashed                           → 500 Internal Error     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Q: "Why does a replacing POST answer 204 but an appending one 201?"
A: "201 announces that a resource now exists that did not before, and
   comes with a Location header. A replacement changes nothing about
   where the resource lives, so there is nothing to return."

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    IntEnum, so members compare equal to plain integers:

        >>> HTTPStatus.CREATED == 201
        True
        >>> HTTPStatus.CREATED.phrase
        'Created'
    """

    # 2xx SUCCESS
    OK = 200                    # Collection or item returned
    CREATED = 201               # Item appended to a collection
    NO_CONTENT = 204            # Replaced or deleted, nothing to return

    # 4xx CLIENT ERRORS
    BAD_REQUEST = 400           # Unreadable body, id mismatch
    NOT_FOUND = 404             # Unknown collection or id, missing id
    METHOD_NOT_ALLOWED = 405    # Not one of GET/POST/PUT/DELETE

    # 5xx SERVER ERRORS
    INTERNAL_SERVER_ERROR = 500  # Handler raised unexpectedly

    @property
    def phrase(self) -> str:
        """
        Get the reason phrase for this status code.

            HTTP/1.1 404 Not Found
                     ─── ─────────
                      │      │
                      │      └── Reason phrase
                      └───────── Status code
        """
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_success(self) -> bool:
        """Check if this is a 2xx (success) status code."""
        return 200 <= self < 300

    @property
    def is_client_error(self) -> bool:
        """Check if this is a 4xx (client error) status code."""
        return 400 <= self < 500

    @property
    def is_server_error(self) -> bool:
        """Check if this is a 5xx (server error) status code."""
        return 500 <= self < 600

    @property
    def is_error(self) -> bool:
        """Check if this is an error status code (4xx or 5xx)."""
        return self >= 400


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.CREATED: "Created",
    HTTPStatus.NO_CONTENT: "No Content",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
