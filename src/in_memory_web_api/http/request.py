"""
=============================================================================
HTTP REQUEST CONSTRUCTION
=============================================================================

Builds HTTPRequest objects the way an HTTP client does before sending
them, except that "sending" means handing them to the in-memory backend.

=============================================================================
BODY ENCODING
=============================================================================

The caller may pass the body in three shapes. Each one is normalized to
raw bytes at construction time:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      body → request.body                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   str        '{"id": 7}'       → encoded with `encoding` (utf-8)     │
    │                                   Content-Type: text/plain           │
    │                                                                      │
    │   bytes      b'{"id": 7}'      → used as is                          │
    │   list[int]  [123, 125]        → bytes([123, 125])                   │
    │                                                                      │
    │   dict       {"name": "Bob"}   → name=Bob                            │
    │                                   Content-Type:                      │
    │                                   application/x-www-form-urlencoded  │
    │                                                                      │
    │   anything else                → InvalidRequestBody (TypeError)      │
    │   text `encoding` cannot encode → InvalidRequestBody                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

A Content-Type supplied by the caller always wins over the default.

Q: "Why fail at construction instead of at dispatch?"
A: "A body of the wrong type is a programming error in the caller, not
   something a server would ever see. Raising before the request exists
   points at the offending call site; a 400 from the backend would hide it."

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode
import json


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HTTPParseError(Exception):
    """
    Raised when a request body cannot be decoded.

    Carries the HTTP status the backend should answer with, so the
    dispatcher can turn it straight into an error response.
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class InvalidRequestBody(TypeError):
    """Raised by build_request() for a body that is not str, bytes, ints or dict."""


@dataclass
class HTTPRequest:
    """
    A request addressed to the in-memory backend.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:     GET, POST, PUT, DELETE (anything else gets a 405)

        url:        The URL exactly as the caller gave it. Relative URLs
                    ("app/heroes/7") are resolved by the URL parser.

        headers:    Request headers with LOWERCASE keys, since header names
                    are case-insensitive.

        body:       Raw body bytes (already encoded by build_request)

        encoding:   Charset used to turn `body` back into text

    =========================================================================
    """

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    encoding: str = "utf-8"

    _body_json: Optional[Any] = field(default=None, repr=False)

    @property
    def content_type(self) -> Optional[str]:
        """Content-Type without parameters ("application/json; charset=x" → "application/json")."""
        ct = self.headers.get("content-type", "")
        return ct.split(";")[0].strip().lower() or None

    @property
    def is_form(self) -> bool:
        """Check if the body holds form-encoded fields."""
        return self.content_type == FORM_CONTENT_TYPE

    @property
    def text(self) -> str:
        """
        Decode the body with the request's encoding.

        Raises:
            HTTPParseError: If the bytes are not valid in that encoding.
        """
        try:
            return self.body.decode(self.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise HTTPParseError(f"Invalid request body: {e}")

    @property
    def json(self) -> Any:
        """
        Parse the body as JSON (cached after the first call).

        Raises:
            HTTPParseError: If the body is empty or not valid JSON.
        """
        if self._body_json is None:
            if not self.body:
                raise HTTPParseError("Invalid request body: body is empty")
            try:
                self._body_json = json.loads(self.text)
            # ValueError covers JSONDecodeError and over-long integer literals
            except (ValueError, RecursionError) as e:
                raise HTTPParseError(f"Invalid request body: {e}")
        return self._body_json

    @property
    def form(self) -> Dict[str, str]:
        """Decode form-encoded fields; later duplicates overwrite earlier ones."""
        return dict(parse_qsl(self.text, keep_blank_values=True))

    def get_header(self, name: str, default: str = "") -> str:
        """Get a header value (case-insensitive lookup)."""
        return self.headers.get(name.lower(), default)


def _encode(text: str, encoding: str) -> bytes:
    try:
        return text.encode(encoding)
    except (UnicodeEncodeError, LookupError) as e:
        raise InvalidRequestBody(f'Cannot encode request body as "{encoding}": {e}') from e


def build_request(
    method: str,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    body: Any = None,
    encoding: Optional[str] = None,
) -> HTTPRequest:
    """
    Construct an HTTPRequest, encoding the body (see module docstring).

    Args:
        method: HTTP method, any case
        url: Absolute or relative request URL
        headers: Optional request headers
        body: None, str, bytes/bytearray, list of ints or dict
        encoding: Charset for str bodies and form fields (default utf-8)

    Returns:
        The constructed request

    Raises:
        InvalidRequestBody: If the body has any other type, or a str or dict
            body cannot be encoded with `encoding`.
    """
    request = HTTPRequest(method=method.upper(), url=str(url))

    if headers:
        request.headers.update({name.lower(): value for name, value in headers.items()})
    if encoding:
        request.encoding = encoding

    if body is None:
        return request

    if isinstance(body, str):
        request.body = _encode(body, request.encoding)
        request.headers.setdefault("content-type", f"text/plain; charset={request.encoding}")
    elif isinstance(body, (bytes, bytearray)):
        request.body = bytes(body)
    elif isinstance(body, list):
        try:
            request.body = bytes(body)
        except (TypeError, ValueError) as e:
            raise InvalidRequestBody(f'Invalid request body "{body!r}": {e}') from e
    elif isinstance(body, dict):
        request.body = _encode(urlencode(body), request.encoding)
        request.headers.setdefault(
            "content-type", f"{FORM_CONTENT_TYPE}; charset={request.encoding}"
        )
    else:
        raise InvalidRequestBody(f'Invalid request body "{body!r}".')

    return request
