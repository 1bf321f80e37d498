from core.agents.communication_bus import CommunicationBus


class TestCommunicationBus:
    def test_delivers_in_subscription_order(self):
        bus = CommunicationBus()
        seen = []
        bus.subscribe("trades", lambda m: seen.append(("first", m)))
        bus.subscribe("trades", lambda m: seen.append(("second", m)))

        assert bus.publish("trades", {"id": 1}) == 2
        assert seen == [("first", {"id": 1}), ("second", {"id": 1})]

    def test_publish_without_subscribers(self):
        assert CommunicationBus().publish("nobody", "hello") == 0

    def test_duplicate_subscription_delivers_once(self):
        bus = CommunicationBus()
        seen = []
        bus.subscribe("c", seen.append)
        bus.subscribe("c", seen.append)

        bus.publish("c", "x")

        assert seen == ["x"]
        assert bus.subscriber_count("c") == 1

    def test_unsubscribe(self):
        bus = CommunicationBus()
        seen = []
        bus.subscribe("c", seen.append)
        bus.unsubscribe("c", seen.append)
        bus.unsubscribe("c", seen.append)

        bus.publish("c", "x")

        assert seen == []
        assert bus.subscriber_count("c") == 0

    def test_failing_handler_does_not_block_others(self):
        bus = CommunicationBus()
        seen = []

        def broken(message):
            raise RuntimeError("handler bug")

        bus.subscribe("c", broken)
        bus.subscribe("c", seen.append)

        assert bus.publish("c", "x") == 1
        assert seen == ["x"]

    def test_channels_are_isolated(self):
        bus = CommunicationBus()
        seen = []
        bus.subscribe("a", seen.append)
        bus.publish("b", "x")
        assert seen == []
