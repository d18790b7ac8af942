"""
=============================================================================
IN_MEMORY_WEB_API - A REST Backend That Lives Inside Your Process
=============================================================================

Client code talks to an InMemoryBackendService exactly as it would talk
to an HTTP client (get/post/put/delete, status codes, headers, JSON
bodies), but every request is answered from in-memory collections seeded
by a factory function. Useful for demos, prototypes and tests that need
realistic REST behaviour without a server.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    in_memory_web_api/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI driver (python -m in_memory_web_api)
    ├── service.py           # InMemoryBackendService
    ├── config.py            # BackendConfig dataclass
    ├── core/
    │   ├── store.py         # Collections and the database
    │   ├── ids.py           # Id parsing and generation
    │   └── latency.py       # Simulated network delay
    ├── http/
    │   ├── request.py       # Request construction, body encoding
    │   ├── response.py      # Responses and {data}/{error} envelopes
    │   ├── url_parser.py    # base / collection / id from a URL
    │   └── status_codes.py  # HTTPStatus
    ├── handlers/
    │   └── crud.py          # GET/POST/PUT/DELETE semantics
    └── middleware/
        ├── base.py          # Middleware pipeline
        └── logging.py       # Access logging

=============================================================================
QUICK START
=============================================================================

    import asyncio
    from in_memory_web_api import InMemoryBackendService

    def heroes():
        return {"heroes": [{"id": 1, "name": "Windstorm"},
                           {"id": 2, "name": "Bombasto"}]}

    async def main():
        http = InMemoryBackendService(heroes)
        await http.put("app/heroes/7", body='{"id": 7, "name": "X"}')  # 201
        response = await http.get("app/heroes/7")
        print(response.json())   # {"data": {"id": 7, "name": "X"}}

    asyncio.run(main())

=============================================================================
"""

__version__ = "1.0.0"

from .config import BackendConfig
from .service import InMemoryBackendService
from .http import HTTPRequest, HTTPResponse, HTTPStatus, InvalidRequestBody

__all__ = [
    "BackendConfig",
    "InMemoryBackendService",
    "HTTPRequest",
    "HTTPResponse",
    "HTTPStatus",
    "InvalidRequestBody",
    "__version__",
]
