from coach.services.event_bus import EventBus, TutorialEvent


def test_subscribe_and_publish_order():
    bus = EventBus()
    order = []

    bus.subscribe(TutorialEvent.STEP_CHANGED, lambda e: order.append(("h1", e.name)))
    bus.subscribe(TutorialEvent.STEP_CHANGED, lambda e: order.append(("h2", e.name)))
    bus.publish(TutorialEvent.STEP_CHANGED, {"id": 1})
    assert order == [("h1", "step_changed"), ("h2", "step_changed")]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe(TutorialEvent.RUN_STARTED, incr, once=True)
    bus.publish(TutorialEvent.RUN_STARTED)
    bus.publish(TutorialEvent.RUN_STARTED)
    assert count == 1
    assert bus.subscriber_count(TutorialEvent.RUN_STARTED) == 0


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
    evt, exc = bus.errors[0]
    assert evt.name == "custom"
    assert isinstance(exc, RuntimeError)


def test_unsubscribe_and_cancel():
    bus = EventBus()
    seen = []
    sub = bus.subscribe(TutorialEvent.RUN_ENDED, lambda e: seen.append(1))
    other = bus.subscribe(TutorialEvent.RUN_ENDED, lambda e: seen.append(2))
    other.cancel()
    bus.publish(TutorialEvent.RUN_ENDED)
    bus.unsubscribe(sub)
    bus.publish(TutorialEvent.RUN_ENDED)
    assert seen == [1]


def test_trace_ring_buffer_is_bounded():
    bus = EventBus(trace_capacity=3)
    for i in range(5):
        bus.publish("tick", "x" * 100 if i == 4 else i)
    traces = bus.recent_traces()
    assert [t.summary for t in traces[:2]] == ["2", "3"]
    assert len(traces) == 3
    assert traces[-1].summary.endswith("...")
    assert len(traces[-1].summary) == 60


def test_handler_can_publish_reentrantly():
    bus = EventBus()
    seen = []
    bus.subscribe("outer", lambda e: bus.publish("inner", e.payload))
    bus.subscribe("inner", lambda e: seen.append(e.payload))
    bus.publish("outer", 7)
    assert seen == [7]
