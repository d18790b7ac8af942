"""
=============================================================================
HTTP RESPONSE ASSEMBLY
=============================================================================

Builds the response objects the in-memory backend hands back to callers.

=============================================================================
ENVELOPES
=============================================================================

Every JSON body is wrapped in a one-key envelope:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   success:   {"data": <record or list of records>}                   │
    │   failure:   {"error": "<message>"}                                  │
    │   204:       (empty body)                                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Success responses reuse the per-request header map (seeded with
Content-Type: application/json, possibly extended with Location by the
handler). Error responses always get a fresh map holding only
Content-Type: application/json.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import json

from .request import HTTPRequest
from .status_codes import HTTPStatus


JSON_CONTENT_TYPE = "application/json"


@dataclass
class HTTPResponse:
    """
    A response produced by the backend.

    Mirrors what an HTTP client returns: status code, headers, raw body.
    Use ResponseBuilder, or the convenience functions below, to make one.
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    request: Optional[HTTPRequest] = field(default=None, repr=False)
    version: str = "HTTP/1.1"

    @property
    def status_code(self) -> int:
        """The status as a plain integer."""
        return int(self.status)

    @property
    def status_line(self) -> str:
        """The status line, e.g. "HTTP/1.1 201 Created"."""
        return f"{self.version} {int(self.status)} {self.status.phrase}"

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """
        Parse the body as JSON.

        Returns:
            The decoded envelope, or None for an empty (204) body
        """
        if not self.body:
            return None
        return json.loads(self.text)

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """Set a response header. Returns self for chaining."""
        self.headers[name] = value
        return self


class ResponseBuilder:
    """
    Fluent builder for HTTPResponse objects.

        response = (ResponseBuilder()
            .status(HTTPStatus.CREATED)
            .headers(request_headers)
            .json({"data": hero})
            .build())

    Each method returns `self` except build().
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body: bytes = b""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        """Set the HTTP status code."""
        self._status = status
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        """Add a single response header."""
        self._headers[name] = value
        return self

    def headers(self, headers: Dict[str, str]) -> "ResponseBuilder":
        """Add multiple headers at once."""
        self._headers.update(headers)
        return self

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        """Set a raw body; strings are UTF-8 encoded."""
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        return self

    def json(self, data: Any) -> "ResponseBuilder":
        """
        Serialize `data` as the JSON body and set Content-Type.

        ensure_ascii=False keeps non-ASCII record fields readable.
        """
        self._body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self._headers["Content-Type"] = JSON_CONTENT_TYPE
        return self

    def build(self) -> HTTPResponse:
        """Build the HTTPResponse."""
        return HTTPResponse(
            status=self._status,
            headers=self._headers,
            body=self._body,
        )


def json_headers() -> Dict[str, str]:
    """A fresh header map seeded with the JSON Content-Type."""
    return {"Content-Type": JSON_CONTENT_TYPE}


# =============================================================================
# SUCCESS RESPONSES
# =============================================================================

def ok(data: Any, headers: Optional[Dict[str, str]] = None) -> HTTPResponse:
    """200 OK with {"data": data}."""
    return (ResponseBuilder()
        .status(HTTPStatus.OK)
        .headers(headers if headers is not None else json_headers())
        .json({"data": data})
        .build())


def created(
    data: Any,
    headers: Optional[Dict[str, str]] = None,
    location: Optional[str] = None,
) -> HTTPResponse:
    """
    201 Created with {"data": data}.

    Args:
        data: The record that was appended
        headers: Per-request header map to extend
        location: URL of the new record, sent as the Location header
    """
    builder = (ResponseBuilder()
        .status(HTTPStatus.CREATED)
        .headers(headers if headers is not None else json_headers()))
    if location:
        builder.header("Location", location)
    return builder.json({"data": data}).build()


def no_content(headers: Optional[Dict[str, str]] = None) -> HTTPResponse:
    """204 No Content; the headers are kept, the body is empty."""
    return (ResponseBuilder()
        .status(HTTPStatus.NO_CONTENT)
        .headers(headers if headers is not None else json_headers())
        .build())


# =============================================================================
# ERROR RESPONSES
# =============================================================================
#
# All of these answer {"error": message} with only the JSON Content-Type,
# whatever headers the request had accumulated so far.
#
# =============================================================================

def error_response(status: HTTPStatus, message: str) -> HTTPResponse:
    """Error envelope with the given status."""
    return (ResponseBuilder()
        .status(status)
        .headers(json_headers())
        .json({"error": message})
        .build())


def bad_request(message: str = "Bad Request") -> HTTPResponse:
    """400 Bad Request."""
    return error_response(HTTPStatus.BAD_REQUEST, message)


def not_found(message: str = "Not Found") -> HTTPResponse:
    """404 Not Found."""
    return error_response(HTTPStatus.NOT_FOUND, message)


def method_not_allowed(method: str, allowed_methods: List[str]) -> HTTPResponse:
    """
    405 Method Not Allowed.

    Includes the Allow header listing the methods the backend does answer.
    """
    response = error_response(
        HTTPStatus.METHOD_NOT_ALLOWED, f'Method "{method}" is not supported'
    )
    return response.set_header("Allow", ", ".join(allowed_methods))


def internal_error(message: str = "Internal Server Error") -> HTTPResponse:
    """500 Internal Server Error. Keep the message generic."""
    return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, message)
