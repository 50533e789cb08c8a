from uikernel.services.event_bus import EventBus, KernelEvent


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []
    bus.subscribe(KernelEvent.THEME_CHANGED, lambda evt: received.append((evt.name, evt.payload)))
    bus.publish(KernelEvent.THEME_CHANGED, {"current": "light"})
    assert received == [(KernelEvent.THEME_CHANGED.value, {"current": "light"})]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe("custom", incr, once=True)
    bus.publish("custom")
    bus.publish("custom")
    assert count == 1
    assert bus.subscriber_count("custom") == 0


def test_error_isolation():
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    bus.subscribe("custom", bad)
    bus.subscribe("custom", lambda _: order.append("good"))
    bus.publish("custom", 123)
    assert order == ["bad", "good"]
    assert len(bus.errors) == 1


def test_unsubscribe():
    bus = EventBus()
    hits = []
    sub = bus.subscribe(KernelEvent.THEME_PRESET_CHANGED, hits.append)
    bus.unsubscribe(sub)
    bus.publish(KernelEvent.THEME_PRESET_CHANGED)
    assert hits == []
    assert not sub.active
