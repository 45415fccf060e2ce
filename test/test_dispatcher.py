"""
Request dispatcher tests

Test classes:
    TestCanDispatch  : handler matching
    TestDispatch     : processing order, uploads, events, errors
"""

import pytest
from utils.plugins import StubListener, StubRequestHandler, StubUploadHandler

from ajaxkit.dispatcher import RequestDispatcher
from ajaxkit.exceptions import NoMatchingHandler
from ajaxkit.http import AjaxRequest
from ajaxkit.plugins import PluginRegistry


@pytest.fixture
def registry():
    return PluginRegistry()


@pytest.fixture
def dispatcher(registry):
    return RequestDispatcher(registry)


@pytest.fixture
def request_():
    return AjaxRequest(method="POST", uri="http://example.com/ajax", params={"fn": "hello"})


class TestCanDispatch:
    def test_no_handlers(self, dispatcher, request_):
        assert dispatcher.can_dispatch(request_) is False

    def test_no_matching_handler(self, registry, dispatcher, request_):
        registry.register(StubRequestHandler("a", match=False))
        assert dispatcher.can_dispatch(request_) is False

    def test_matching_handler(self, registry, dispatcher, request_):
        registry.register(StubRequestHandler("a", match=False))
        registry.register(StubRequestHandler("b", match=True))
        assert dispatcher.can_dispatch(request_) is True

    def test_upload_handler_alone_never_matches(self, registry, dispatcher, request_):
        upload = StubUploadHandler()
        registry.register(upload)
        assert dispatcher.can_dispatch(request_) is False
        assert upload.match_calls == 0


class TestDispatch:
    def test_first_match_in_priority_order(self, registry, dispatcher, request_):
        journal = []
        registry.register(StubRequestHandler("late", journal=journal), 2000)
        registry.register(StubRequestHandler("early", journal=journal), 10)
        assert dispatcher.dispatch(request_) == {"handler": "early"}
        assert journal == ["early"]

    def test_no_match_raises(self, registry, dispatcher, request_):
        registry.register(StubRequestHandler("a", match=False))
        with pytest.raises(NoMatchingHandler) as exc_info:
            dispatcher.dispatch(request_)
        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"uri": "http://example.com/ajax"}

    def test_upload_processed_before_handler(self, registry, dispatcher, request_):
        journal = []
        registry.register(StubRequestHandler("function", journal=journal), 10)
        registry.register(StubUploadHandler(journal=journal), 5000)
        dispatcher.dispatch(request_)
        assert journal == ["upload", "function"]

    def test_no_upload_handler(self, registry, dispatcher, request_):
        journal = []
        registry.register(StubRequestHandler("function", journal=journal))
        dispatcher.dispatch(request_)
        assert journal == ["function"]

    def test_request_events(self, registry, dispatcher, request_):
        listener = StubListener("watcher", ["pre.request", "post.request"])
        registry.register(listener)
        registry.register(StubRequestHandler("function", result={"ok": True}))
        dispatcher.dispatch(request_)

        names = [name for name, _ in listener.received]
        assert names == ["pre.request", "post.request"]
        pre, post = (payload for _, payload in listener.received)
        assert pre == {"handler": "function", "request": request_}
        assert post["result"] == {"ok": True}

    def test_failing_listener_does_not_stop_dispatch(self, registry, dispatcher, request_):
        registry.register(StubListener("broken", ["pre.request"], fail=True))
        registry.register(StubRequestHandler("function"))
        assert dispatcher.dispatch(request_) == {"handler": "function"}
