"""
Tests for the event dispatcher.
"""

import logging

from event_dispatcher import EventDispatcher, Event

def test_listeners_receive_event():
    dispatcher = EventDispatcher()
    seen = []
    dispatcher.add_listener("need:changed", seen.append)

    event = Event("need:changed", {"changes": []})
    dispatcher.dispatch_event(event)

    assert seen == [event]

def test_priority_then_registration_order():
    dispatcher = EventDispatcher()
    order = []
    dispatcher.add_listener("item:reaction", lambda e: order.append("a"))
    dispatcher.add_listener("item:reaction", lambda e: order.append("b"))
    dispatcher.add_listener("item:reaction", lambda e: order.append("urgent"), priority=10)
    dispatcher.add_listener("item:*", lambda e: order.append("wild"), priority=5)

    dispatcher.dispatch_event(Event("item:reaction"))

    assert order == ["urgent", "wild", "a", "b"]

def test_wildcards_match_namespace_only():
    dispatcher = EventDispatcher()
    seen = []
    dispatcher.add_listener("behavior:*", lambda e: seen.append(e.event_type))

    dispatcher.dispatch_event(Event("behavior:state_change"))
    dispatcher.dispatch_event(Event("behavior:completed"))
    dispatcher.dispatch_event(Event("behaviorx"))
    dispatcher.dispatch_event(Event("need:changed"))

    assert seen == ["behavior:state_change", "behavior:completed"]

def test_remove_listener():
    dispatcher = EventDispatcher()
    seen = []
    dispatcher.add_listener("tracking:update", seen.append)
    dispatcher.add_listener("tracking:*", seen.append)
    dispatcher.remove_listener("tracking:update", seen.append)
    dispatcher.remove_listener("tracking:*", seen.append)

    dispatcher.dispatch_event(Event("tracking:update"))

    assert seen == []
    assert not dispatcher.has_listeners("tracking:update")

def test_faulty_listener_does_not_stop_others(caplog):
    dispatcher = EventDispatcher()
    seen = []

    def broken(event):
        raise KeyError("missing")

    dispatcher.add_listener("interaction:pattern", broken, priority=1)
    dispatcher.add_listener("interaction:pattern", seen.append)

    with caplog.at_level(logging.ERROR, logger='companion.events'):
        dispatcher.dispatch_event(Event("interaction:pattern", "double_click"))

    assert len(seen) == 1
    assert "broken" in caplog.text

def test_has_listeners():
    dispatcher = EventDispatcher()
    assert not dispatcher.has_listeners("need:changed")
    dispatcher.add_listener("need:*", lambda e: None)
    assert dispatcher.has_listeners("need:changed")
