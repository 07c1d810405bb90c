from app.services.cart_events import CartEvent, CartEventBus


def test_subscribers_receive_events():
    bus = CartEventBus()
    received = []
    bus.subscribe(received.append)

    bus.publish(CartEvent(user_id="user-1", action="added", item_id=7))

    assert received == [CartEvent(user_id="user-1", action="added", item_id=7)]


def test_unsubscribe_stops_delivery():
    bus = CartEventBus()
    received = []
    unsubscribe = bus.subscribe(received.append)

    unsubscribe()
    unsubscribe()
    bus.publish(CartEvent(user_id="user-1", action="removed"))

    assert received == []


def test_publish_without_listeners_is_a_noop():
    CartEventBus().publish(CartEvent(user_id="user-1", action="checked_out"))


def test_failing_listener_does_not_block_others():
    bus = CartEventBus()
    received = []

    def broken(event):
        raise RuntimeError("badge widget unmounted")

    bus.subscribe(broken)
    bus.subscribe(received.append)

    bus.publish(CartEvent(user_id="user-1", action="updated"))

    assert len(received) == 1
