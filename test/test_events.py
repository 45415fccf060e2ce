"""
Event dispatcher tests
"""

import logging

from utils.plugins import StubListener

from ajaxkit.events import ALL_EVENTS, EVENT_POST_SETUP, EVENT_PRE_SETUP, EventDispatcher


class TestEventNames:
    def test_all_events(self):
        assert ALL_EVENTS == ["pre.setup", "post.setup", "pre.request", "post.request"]


class TestEventDispatcher:
    def test_fire_without_listeners(self):
        assert EventDispatcher().fire(EVENT_PRE_SETUP) == []

    def test_listener_receives_subscribed_events_only(self):
        events = EventDispatcher()
        listener = StubListener("l", [EVENT_PRE_SETUP])
        events.add_listener(listener)

        assert events.fire(EVENT_PRE_SETUP, {"x": 1}) == ["l"]
        assert events.fire(EVENT_POST_SETUP) == []
        assert listener.received == [(EVENT_PRE_SETUP, {"x": 1})]

    def test_listeners_called_in_subscription_order(self):
        events = EventDispatcher()
        events.add_listener(StubListener("a", [EVENT_PRE_SETUP]))
        events.add_listener(StubListener("b", [EVENT_PRE_SETUP]))
        assert events.fire(EVENT_PRE_SETUP) == ["a", "b"]

    def test_exception_is_logged_and_skipped(self, caplog):
        events = EventDispatcher()
        events.add_listener(StubListener("broken", [EVENT_PRE_SETUP], fail=True))
        events.add_listener(StubListener("ok", [EVENT_PRE_SETUP]))
        with caplog.at_level(logging.WARNING, logger="ajaxkit.events"):
            assert events.fire(EVENT_PRE_SETUP) == ["ok"]
        assert "listener failure" in caplog.text

    def test_unknown_event_name_warns(self, caplog):
        events = EventDispatcher()
        listener = StubListener("l", ["no.such.event"])
        with caplog.at_level(logging.WARNING, logger="ajaxkit.events"):
            events.add_listener(listener)
        assert "no.such.event" in caplog.text
        assert events.listeners("no.such.event") == [listener]

    def test_listeners_returns_a_copy(self):
        events = EventDispatcher()
        events.listeners(EVENT_PRE_SETUP).append("x")
        assert events.listeners(EVENT_PRE_SETUP) == []
