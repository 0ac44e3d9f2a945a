"""Tests for the signal bus."""
import logging

from persona_politics.signals import SignalBus


def test_publish_is_deferred_until_flush():
    bus = SignalBus()
    seen = []
    bus.subscribe("remark", lambda name, data: seen.append((name, data)))
    bus.publish("remark", text="hi")
    assert seen == []
    assert bus.pending() == ["remark"]
    bus.flush()
    assert seen == [("remark", {"text": "hi"})]
    assert bus.pending() == []


def test_only_matching_subscribers():
    bus = SignalBus()
    seen = []
    bus.subscribe("game_over", lambda name, data: seen.append(name))
    bus.publish("term_over")
    bus.flush()
    assert seen == []


def test_unsubscribe():
    bus = SignalBus()
    seen = []

    def handler(name, data):
        seen.append(name)

    bus.subscribe("x", handler)
    bus.unsubscribe("x", handler)
    bus.unsubscribe("x", handler)
    bus.unsubscribe("never", handler)
    bus.publish("x")
    bus.flush()
    assert seen == []


def test_failing_handler_is_isolated(caplog):
    bus = SignalBus()
    seen = []

    def broken(name, data):
        raise RuntimeError("boom")

    bus.subscribe("x", broken)
    bus.subscribe("x", lambda name, data: seen.append(name))
    with caplog.at_level(logging.ERROR, logger="persona_politics.signals"):
        bus.flush()
        bus.publish("x")
        bus.flush()
    assert seen == ["x"]
    assert "Handler for 'x' failed" in caplog.text


def test_signals_published_during_flush_wait_for_next_flush():
    bus = SignalBus()
    seen = []
    bus.subscribe("a", lambda name, data: bus.publish("b"))
    bus.subscribe("b", lambda name, data: seen.append(name))
    bus.publish("a")
    bus.flush()
    assert seen == []
    bus.flush()
    assert seen == ["b"]


def test_clear():
    bus = SignalBus()
    bus.publish("x")
    bus.clear()
    assert bus.pending() == []
