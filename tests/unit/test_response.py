"""
Unit tests for HTTP response building.
"""

import pytest

from in_memory_web_api.http.response import (
    HTTPResponse,
    ResponseBuilder,
    bad_request,
    created,
    internal_error,
    json_headers,
    method_not_allowed,
    no_content,
    not_found,
    ok,
)
from in_memory_web_api.http.status_codes import HTTPStatus


class TestHTTPStatus:
    """Tests for HTTPStatus."""

    def test_phrase(self):
        assert HTTPStatus.NO_CONTENT.phrase == "No Content"
        assert HTTPStatus.METHOD_NOT_ALLOWED.phrase == "Method Not Allowed"

    def test_compares_to_int(self):
        assert HTTPStatus.CREATED == 201

    @pytest.mark.parametrize("status,success,client,server", [
        (HTTPStatus.OK, True, False, False),
        (HTTPStatus.NOT_FOUND, False, True, False),
        (HTTPStatus.INTERNAL_SERVER_ERROR, False, False, True),
    ])
    def test_categories(self, status, success, client, server):
        assert status.is_success is success
        assert status.is_client_error is client
        assert status.is_server_error is server
        assert status.is_error is (client or server)


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_status_line(self):
        """Test status line generation."""
        response = HTTPResponse(status=HTTPStatus.CREATED)
        assert response.status_line == "HTTP/1.1 201 Created"

        response = HTTPResponse(status=HTTPStatus.NOT_FOUND)
        assert response.status_line == "HTTP/1.1 404 Not Found"

    def test_status_code_is_int(self):
        response = HTTPResponse(status=HTTPStatus.NO_CONTENT)

        assert response.status_code == 204
        assert type(response.status_code) is int

    def test_json_of_empty_body(self):
        """Test that a 204 body decodes to None."""
        assert HTTPResponse(status=HTTPStatus.NO_CONTENT).json() is None

    def test_set_header_chaining(self):
        """Test method chaining for headers."""
        response = (HTTPResponse()
            .set_header("X-One", "1")
            .set_header("X-Two", "2"))

        assert response.headers == {"X-One": "1", "X-Two": "2"}


class TestResponseBuilder:
    """Tests for ResponseBuilder."""

    def test_fluent_build(self):
        response = (ResponseBuilder()
            .status(HTTPStatus.CREATED)
            .header("X-Custom", "value")
            .json({"data": {"id": 1}})
            .build())

        assert response.status == HTTPStatus.CREATED
        assert response.headers["X-Custom"] == "value"
        assert response.headers["Content-Type"] == "application/json"
        assert response.json() == {"data": {"id": 1}}

    def test_text_body(self):
        response = ResponseBuilder().body("héllo").build()

        assert response.body == "héllo".encode("utf-8")
        assert response.text == "héllo"

    def test_non_ascii_json_kept_readable(self):
        response = ResponseBuilder().json({"name": "Zoë"}).build()

        assert "Zoë" in response.text


class TestConvenienceFunctions:
    """Tests for the envelope helpers."""

    def test_ok(self):
        response = ok([1, 2])

        assert response.status == HTTPStatus.OK
        assert response.json() == {"data": [1, 2]}
        assert response.headers == json_headers()

    def test_ok_extends_given_headers(self):
        headers = {"Content-Type": "application/json", "X-Trace": "t"}

        response = ok({}, headers)

        assert response.headers["X-Trace"] == "t"

    def test_created_with_location(self):
        response = created({"id": 3}, location="app/heroes/3")

        assert response.status == HTTPStatus.CREATED
        assert response.headers["Location"] == "app/heroes/3"
        assert response.json() == {"data": {"id": 3}}

    def test_created_without_location(self):
        assert "Location" not in created({"id": 3}).headers

    def test_no_content(self):
        response = no_content()

        assert response.status == HTTPStatus.NO_CONTENT
        assert response.body == b""
        assert response.headers["Content-Type"] == "application/json"

    @pytest.mark.parametrize("factory,status", [
        (bad_request, HTTPStatus.BAD_REQUEST),
        (not_found, HTTPStatus.NOT_FOUND),
        (internal_error, HTTPStatus.INTERNAL_SERVER_ERROR),
    ])
    def test_error_envelope(self, factory, status):
        response = factory("went wrong")

        assert response.status == status
        assert response.json() == {"error": "went wrong"}
        assert response.headers == {"Content-Type": "application/json"}

    def test_method_not_allowed(self):
        response = method_not_allowed("PATCH", ["GET", "POST"])

        assert response.status == HTTPStatus.METHOD_NOT_ALLOWED
        assert response.headers["Allow"] == "GET, POST"
        assert response.json() == {"error": 'Method "PATCH" is not supported'}

    def test_json_headers_fresh_each_call(self):
        first = json_headers()
        first["X-Mutated"] = "yes"

        assert "X-Mutated" not in json_headers()
