from typing import Any, Callable, Dict, List

from core.logging import get_logger

logger = get_logger(__name__, component="agents")

Handler = Callable[[Any], None]


class CommunicationBus:
    """In-process pub/sub between agents.

    Delivery is synchronous and follows subscription order. Nothing is
    persisted or replayed, and publishing to a channel without subscribers
    is a no-op.

    Handler errors are never raised to the publisher: a failing handler is
    logged and skipped, and ``publish`` reports only successful deliveries.
    """

    def __init__(self):
        self._channels: Dict[str, List[Handler]] = {}

    def subscribe(self, channel: str, handler: Handler) -> None:
        handlers = self._channels.setdefault(channel, [])
        # Set semantics: subscribing twice delivers once
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, channel: str, handler: Handler) -> None:
        handlers = self._channels.get(channel)
        if handlers and handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._channels[channel]

    def publish(self, channel: str, message: Any) -> int:
        """Deliver ``message`` to every current subscriber, return the delivery count."""
        delivered = 0
        # Copy so handlers may (un)subscribe while being called
        for handler in list(self._channels.get(channel, ())):
            try:
                handler(message)
                delivered += 1
            except Exception as e:
                logger.error("Bus handler failed", channel=channel,
                             handler=getattr(handler, "__name__", repr(handler)),
                             error=str(e))
        return delivered

    def subscriber_count(self, channel: str) -> int:
        return len(self._channels.get(channel, ()))
