"""
=============================================================================
CRUD HANDLER
=============================================================================

Applies REST semantics to the in-memory collections.

=============================================================================
REQUEST FLOW
=============================================================================

    HTTPRequest
         │
         ▼
    parse_url()  ───── no collection segment ──────────► 404
         │
         ▼
    store.lookup(collection) ── unknown collection ────► 404
         │
         ▼
    parse_id(raw id)
         │
         ▼
    RequestInfo(request, base, collection, headers, id, resource_url)
         │
         ▼
    ┌────────┬────────┬────────┬──────────┬─────────────────────────┐
    │  GET   │  POST  │  PUT   │  DELETE  │  anything else → 405    │
    └────────┴────────┴────────┴──────────┴─────────────────────────┘

=============================================================================
METHOD SEMANTICS
=============================================================================

    GET     /app/heroes       200 {"data": [...all records...]}
    GET     /app/heroes/7     200 {"data": {...}}   or 404

    POST    /app/heroes       create-or-replace keyed by the body id
                              (missing id → URL id → generated id)
                              replaced: 204        appended: 201 + Location

    PUT     /app/heroes/7     URL id required (404), body id must match (400)
                              replaced: 204        appended: 201

    DELETE  /app/heroes/7     URL id required (404)
                              204, or 404 for a missing record when
                              delete_404 is configured

Failures are returned as {"error": ...} responses, never raised.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
import logging

from ..config import BackendConfig
from ..core.ids import RecordId, generate_id, parse_id, same_id
from ..core.store import Collection, CollectionStore, Record
from ..http.request import HTTPParseError, HTTPRequest
from ..http.response import (
    HTTPResponse,
    bad_request,
    created,
    json_headers,
    method_not_allowed,
    no_content,
    not_found,
    ok,
)
from ..http.url_parser import parse_url


logger = logging.getLogger(__name__)


SUPPORTED_METHODS = ["GET", "POST", "PUT", "DELETE"]


@dataclass
class RequestInfo:
    """Everything a method handler needs to know about one request."""

    request: HTTPRequest
    base: str
    collection: Collection
    headers: Dict[str, str] = field(default_factory=json_headers)
    id: Optional[RecordId] = None
    resource_url: str = ""

    @property
    def has_id(self) -> bool:
        return self.id is not None


class CrudHandler:
    """
    Dispatches requests to GET/POST/PUT/DELETE handlers over a store.

    Usage:
        handler = CrudHandler(store, BackendConfig())
        response = handler.handle(build_request("GET", "app/heroes"))
    """

    def __init__(self, store: CollectionStore, config: Optional[BackendConfig] = None):
        self.store = store
        self.config = config or BackendConfig()
        self._methods: Dict[str, Callable[[RequestInfo], HTTPResponse]] = {
            "GET": self._get,
            "POST": self._post,
            "PUT": self._put,
            "DELETE": self._delete,
        }

    def __call__(self, request: HTTPRequest) -> HTTPResponse:
        return self.handle(request)

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Interpret `request` against the store and build the response.

        Args:
            request: The request to answer

        Returns:
            The response; the request is attached to it
        """
        response = self._dispatch(request)
        response.request = request
        return response

    def _dispatch(self, request: HTTPRequest) -> HTTPResponse:
        method = request.method.upper()
        method_handler = self._methods.get(method)
        if method_handler is None:
            return method_not_allowed(method, SUPPORTED_METHODS)

        parsed = parse_url(request.url, self.config.host, self.config.root_path)
        if not parsed.has_collection:
            return not_found(f'Cannot resolve a collection from "{request.url}"')

        collection = self.store.lookup(parsed.collection_name)
        if collection is None:
            return not_found(f'Collection "{parsed.collection_name}" not found')

        info = RequestInfo(
            request=request,
            base=parsed.base,
            collection=collection,
            headers=json_headers(),
            id=parse_id(parsed.id),
            resource_url=parsed.resource_url,
        )
        logger.debug(f"{method} {collection} id={info.id!r}")
        return method_handler(info)

    # =========================================================================
    # METHOD HANDLERS
    # =========================================================================

    def _get(self, info: RequestInfo) -> HTTPResponse:
        if not info.has_id:
            return ok(info.collection.records, info.headers)

        record = self.store.find_by_id(info.collection, info.id)
        if record is None:
            return not_found(f'"{info.collection}" with id="{info.id}" not found')
        return ok(record, info.headers)

    def _post(self, info: RequestInfo) -> HTTPResponse:
        try:
            item = self._read_record(info.request)
        except HTTPParseError as e:
            return bad_request(str(e))

        # An id in the body wins over the URL id; the URL id is not checked
        # against it.
        if "id" not in item:
            item["id"] = info.id if info.has_id else generate_id(info.collection)

        index = self.store.index_of(info.collection, item["id"])
        if index > -1:
            info.collection.replace_at(index, item)
            return no_content(info.headers)

        info.collection.append(item)
        return created(item, info.headers, location=f"{info.resource_url}/{item['id']}")

    def _put(self, info: RequestInfo) -> HTTPResponse:
        if not info.has_id:
            return not_found(f'Missing "{info.collection}" id')

        try:
            item = self._read_record(info.request)
        except HTTPParseError as e:
            return bad_request(str(e))

        if not same_id(item.get("id"), info.id):
            return bad_request(f'"{info.collection}" id does not match item.id')

        index = self.store.index_of(info.collection, info.id)
        if index > -1:
            info.collection.replace_at(index, item)
            return no_content(info.headers)

        info.collection.append(item)
        return created(item, info.headers)

    def _delete(self, info: RequestInfo) -> HTTPResponse:
        if not info.has_id:
            return not_found(f'Missing "{info.collection}" id')

        index = self.store.index_of(info.collection, info.id)
        if index > -1:
            info.collection.remove_at(index)
        elif self.config.delete_404:
            return not_found(f'"{info.collection}" with id="{info.id}" not found')

        return no_content(info.headers)

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _read_record(request: HTTPRequest) -> Record:
        """
        Decode the request body into a fresh record dict.

        Form-encoded bodies become a dict of their fields, with the id
        resolved like a URL id; everything else must be a JSON object.

        Raises:
            HTTPParseError: If the body is unreadable or not an object.
        """
        if request.is_form:
            record: Record = dict(request.form)
            if "id" in record:
                record["id"] = parse_id(record["id"])
            return record

        data: Any = request.json
        if not isinstance(data, dict):
            raise HTTPParseError(
                f"Invalid request body: expected a JSON object, got {type(data).__name__}"
            )
        return dict(data)
