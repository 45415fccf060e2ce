"""
Request adapter tests
"""

import asyncio

import pytest
from starlette.requests import Request

from ajaxkit.exceptions import MissingOptionError
from ajaxkit.http import URIDetector, read_request


def make_request(method="GET", path="/page", query=b"", body=b"", content_type=None):
    headers = [(b"host", b"example.com")]
    if content_type:
        headers.append((b"content-type", content_type))
    scope = {
        "type": "http",
        "method": method,
        "scheme": "http",
        "path": path,
        "query_string": query,
        "headers": headers,
        "server": ("example.com", 80),
    }

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


class TestReadRequest:
    def test_query_parameters(self):
        request = asyncio.run(read_request(make_request(query=b"fn=hello&x=1")))
        assert request.method == "GET"
        assert request.uri == "http://example.com/page?fn=hello&x=1"
        assert request.params == {"fn": "hello", "x": "1"}
        assert request.files == {}
        assert request.headers["host"] == "example.com"

    def test_form_fields_override_query(self):
        raw = make_request(
            method="POST",
            query=b"fn=query&x=1",
            body=b"fn=form",
            content_type=b"application/x-www-form-urlencoded",
        )
        request = asyncio.run(read_request(raw))
        assert request.params == {"fn": "form", "x": "1"}


class TestURIDetector:
    def test_query_and_fragment_dropped(self):
        detector = URIDetector(make_request(path="/app/page", query=b"a=1"))
        assert detector.detect() == "http://example.com/app/page"

    def test_no_request(self):
        with pytest.raises(MissingOptionError):
            URIDetector().detect()
