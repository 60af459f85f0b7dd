import pytest

from dgengine import message_bus
from dgengine.message import GuiGoBack, GuiPointerMove, MessageFlag, Quit
from dgengine.message_bus import MessageBus


def test_register_counts_messages():
    bus = MessageBus()
    assert bus.message_count() == 0
    bus.register(GuiGoBack())
    bus.register(Quit())
    assert bus.message_count() == 2


def test_dispatch_in_order_and_empties_queue():
    bus = MessageBus()
    bus.register(GuiGoBack())
    bus.register(Quit())
    seen = []
    bus.dispatch_messages([lambda m: seen.append(str(m))])
    assert seen == ["GUI_GoBack", "Quit"]
    assert bus.message_count() == 0


def test_register_stores_a_copy():
    bus = MessageBus()
    msg = GuiPointerMove(x=1, y=2)
    bus.register(msg)
    msg.x = 100
    seen = []
    bus.dispatch_messages([lambda m: seen.append(m.x)])
    assert seen == [1]


def test_handled_message_stops_at_first_handler():
    bus = MessageBus()
    bus.register(GuiGoBack())
    calls = []
    delivered = []

    def first(m):
        calls.append("first")
        delivered.append(m)
        m.set_flag(MessageFlag.HANDLED, True)

    def second(m):
        calls.append("second")

    bus.dispatch_messages([first, second])
    assert calls == ["first"]
    assert len(delivered) == 1
    assert str(delivered[0]) == "GUI_GoBack"
    assert delivered[0].query_flag(MessageFlag.HANDLED) is True
    assert bus.message_count() == 0


def test_unhandled_message_reaches_every_handler():
    bus = MessageBus()
    bus.register(GuiGoBack())
    calls = []
    bus.dispatch_messages([lambda m: calls.append("a"), lambda m: calls.append("b")])
    assert calls == ["a", "b"]


def test_messages_posted_during_dispatch_run_in_next_cycle():
    bus = MessageBus()
    bus.register(GuiGoBack())
    seen = []

    def handler(m):
        seen.append(str(m))
        if isinstance(m, GuiGoBack):
            bus.register(Quit())

    bus.dispatch_messages([handler])
    assert seen == ["GUI_GoBack", "Quit"]
    assert bus.message_count() == 0


def test_cycle_limit_leaves_later_messages_queued():
    bus = MessageBus()
    bus.register(GuiGoBack())
    seen = []

    def handler(m):
        seen.append(str(m))
        bus.register(Quit())

    bus.dispatch_messages([handler], 1)
    assert seen == ["GUI_GoBack"]
    assert bus.message_count() == 1


def test_shared_bus_post():
    bus = message_bus.init()
    try:
        assert message_bus.instance() is bus
        message_bus.post(Quit())
        assert bus.message_count() == 1
    finally:
        message_bus.shut_down()
    assert message_bus.instance() is None


def test_post_without_bus_raises():
    message_bus.shut_down()
    with pytest.raises(RuntimeError):
        message_bus.post(Quit())