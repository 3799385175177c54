from portal.app.services.change_feed import ChangeFeed


def test_publish_reaches_matching_subscribers_only():
    feed = ChangeFeed()
    received = []
    feed.subscribe("clients", {"id": "a"}, lambda table, row: received.append(("a", row)))
    feed.subscribe("clients", None, lambda table, row: received.append(("all", row)))
    feed.subscribe("sessions", None, lambda table, row: received.append(("sessions", row)))

    delivered = feed.publish("clients", {"id": "b", "event": "updated"})

    assert delivered == 1
    assert received == [("all", {"id": "b", "event": "updated"})]


def test_filter_values_compare_as_strings():
    from uuid import uuid4

    feed = ChangeFeed()
    client_id = uuid4()
    received = []
    feed.subscribe("interactions", {"client_id": client_id}, lambda t, r: received.append(r))

    assert feed.publish("interactions", {"id": "1", "client_id": str(client_id)}) == 1
    assert len(received) == 1


def test_unsubscribe_stops_delivery():
    feed = ChangeFeed()
    received = []
    handle = feed.subscribe("clients", None, lambda t, r: received.append(r))

    assert feed.unsubscribe(handle) is True
    assert feed.unsubscribe(handle) is False
    assert feed.publish("clients", {"id": "x"}) == 0
    assert received == []
    assert len(feed) == 0


def test_failing_subscriber_does_not_block_others():
    feed = ChangeFeed()
    received = []

    def broken(table, row):
        raise RuntimeError("boom")

    feed.subscribe("clients", None, broken)
    feed.subscribe("clients", None, lambda t, r: received.append(r))

    assert feed.publish("clients", {"id": "x"}) == 1
    assert received == [{"id": "x"}]
