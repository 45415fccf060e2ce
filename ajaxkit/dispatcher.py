"""
Request Dispatcher

Routes an incoming AJAX request to the first request handler, in priority
order, that recognizes it. The file-upload handler never matches on its own;
it pre-processes uploads for whichever handler does.
"""

from __future__ import annotations

import logging
from typing import Any

from ajaxkit.events import EVENT_POST_REQUEST, EVENT_PRE_REQUEST, EventDispatcher
from ajaxkit.exceptions import NoMatchingHandler
from ajaxkit.plugins.base import FILE_UPLOAD, RequestHandler
from ajaxkit.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)


class RequestDispatcher:
    def __init__(self, registry: PluginRegistry, events: EventDispatcher | None = None) -> None:
        self.registry = registry
        self.events = events or registry.events

    def _find_handler(self, request: Any) -> RequestHandler | None:
        for handler in self.registry.request_handlers():
            if handler.name != FILE_UPLOAD and handler.matches(request):
                return handler
        return None

    def can_dispatch(self, request: Any) -> bool:
        """
        Check if the request can be processed by one of the request handlers.

        A request no handler recognizes is an initial page load, not an
        AJAX call.
        """
        return self._find_handler(request) is not None

    def dispatch(self, request: Any) -> Any:
        """
        Process the request with the first matching handler.

        Uploaded files are processed by the upload handler, when one is
        registered, before the matching handler reads the request.

        Raises:
            NoMatchingHandler: No request handler recognizes the request.
        """
        handler = self._find_handler(request)
        if handler is None:
            raise NoMatchingHandler(uri=getattr(request, "uri", None))

        self.events.fire(EVENT_PRE_REQUEST, {"handler": handler.name, "request": request})
        upload_handler = self.registry.get_request_handler(FILE_UPLOAD)
        if upload_handler is not None:
            upload_handler.process(request)
        logger.debug("Dispatching request to %s", handler.name)
        result = handler.process(request)
        self.events.fire(EVENT_POST_REQUEST, {"handler": handler.name, "request": request, "result": result})
        return result
