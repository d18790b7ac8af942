"""
=============================================================================
HTTP MESSAGE TYPES
=============================================================================

The request/response half of the in-memory backend. Nothing here touches
a socket: requests are built in-process and responses are handed straight
back to the caller.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ request.py      build_request(): body encoding, HTTPRequest         │
    │ url_parser.py   parse_url(): base / collection / id / resource url  │
    │ response.py     HTTPResponse, ResponseBuilder, {data}/{error}       │
    │ status_codes.py HTTPStatus enum with reason phrases                 │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import (
    HTTPRequest,
    HTTPParseError,
    InvalidRequestBody,
    build_request,
)
from .response import (
    HTTPResponse,
    ResponseBuilder,
    ok,                  # 200 OK
    created,             # 201 Created
    no_content,          # 204 No Content
    error_response,      # any status, {"error": ...}
    bad_request,         # 400 Bad Request
    not_found,           # 404 Not Found
    method_not_allowed,  # 405 Method Not Allowed
    internal_error,      # 500 Internal Server Error
)
from .status_codes import HTTPStatus
from .url_parser import ParsedUrl, parse_url

__all__ = [
    # Requests
    "HTTPRequest",
    "HTTPParseError",
    "InvalidRequestBody",
    "build_request",

    # Responses
    "HTTPResponse",
    "ResponseBuilder",
    "ok",
    "created",
    "no_content",
    "error_response",
    "bad_request",
    "not_found",
    "method_not_allowed",
    "internal_error",

    # Status codes
    "HTTPStatus",

    # URL parsing
    "ParsedUrl",
    "parse_url",
]
