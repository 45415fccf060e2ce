"""
HTTP adapters

AjaxRequest is the framework-independent view of an incoming request that
request handlers inspect. URIDetector resolves the URI the client library
posts its AJAX calls to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from starlette.datastructures import UploadFile
from starlette.requests import Request

from ajaxkit.exceptions import MissingOptionError


@dataclass
class AjaxRequest:
    """
    Parameters of an incoming request.

    Attributes:
        method:  HTTP method.
        uri:     Full request URI.
        params:  Query string and form fields; form fields win on conflict.
        files:   Uploaded files, keyed by form field name.
        headers: Request headers, lower-cased names.
    """

    method: str
    uri: str
    params: dict[str, Any] = field(default_factory=dict)
    files: dict[str, list[UploadFile]] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)


async def read_request(request: Request) -> AjaxRequest:
    """Read the query string, form fields and uploads of a Starlette request."""
    params: dict[str, Any] = dict(request.query_params)
    files: dict[str, list[UploadFile]] = {}
    if request.method in ("POST", "PUT", "PATCH"):
        form = await request.form()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                files.setdefault(key, []).append(value)
            else:
                params[key] = value
    return AjaxRequest(
        method=request.method,
        uri=str(request.url),
        params=params,
        files=files,
        headers={name.lower(): value for name, value in request.headers.items()},
    )


class URIDetector:
    """Detect the request URI from the current HTTP request."""

    def __init__(self, request: Request | None = None) -> None:
        self.request = request

    def detect(self) -> str:
        if self.request is None:
            raise MissingOptionError("core.request.uri")
        # Drop the query string and fragment
        return str(self.request.url.replace(query="", fragment=""))
