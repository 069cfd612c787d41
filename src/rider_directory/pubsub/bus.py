"""In-process topic bus for rider lifecycle notifications.

The bus owns a registry of topic -> subscriptions. Each subscription has its
own unbounded queue, so publishing never waits on a subscriber and every
subscriber sees events from one publisher in publish order. There is no
deduplication: subscribing twice delivers every event twice.

Delivery is at-most-once. Events live only in memory, and publishers call
``publish`` after their storage commit, so an event is lost if the process
dies in between.
"""

import asyncio
import logging
import queue
import threading
from collections import defaultdict
from collections.abc import Iterator
from types import TracebackType
from typing import cast

from .channels import ALL_TOPICS, RiderEvent

logger = logging.getLogger(__name__)

_CLOSED = object()


class Subscription:
    """A single registration on a topic with its own delivery queue."""

    def __init__(self, bus: "NotificationBus", topic: str):
        self.bus = bus
        self.topic = topic
        self._queue: queue.Queue[object] = queue.Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def deliver(self, event: RiderEvent) -> None:
        if not self.closed:
            self._queue.put_nowait(event)

    def get(self, timeout: float | None = None) -> RiderEvent:
        """Block until the next event arrives.

        Raises:
            queue.Empty: If ``timeout`` elapses, or the subscription was
                closed and every pending event has been consumed.
        """
        if self.closed and self._queue.empty():
            raise queue.Empty
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            raise queue.Empty
        return cast(RiderEvent, item)

    def get_nowait(self) -> RiderEvent:
        item = self._queue.get_nowait()
        if item is _CLOSED:
            raise queue.Empty
        return cast(RiderEvent, item)

    def drain(self) -> list[RiderEvent]:
        """Return every event already delivered without blocking."""
        events = []
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return events
            if item is not _CLOSED:
                events.append(cast(RiderEvent, item))

    async def next_event(
        self, timeout: float | None = None, poll_interval: float = 0.01
    ) -> RiderEvent:
        """Await the next event from an asyncio task.

        The queue is only read between sleeps on the event loop, so
        cancelling the await never takes an event off the queue.

        Raises:
            queue.Empty: If ``timeout`` elapses, or the subscription was
                closed and every pending event has been consumed.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                if self.closed or (deadline is not None and loop.time() >= deadline):
                    raise
                await asyncio.sleep(poll_interval)
                continue
            if item is _CLOSED:
                raise queue.Empty
            return cast(RiderEvent, item)

    def __iter__(self) -> Iterator[RiderEvent]:
        while True:
            try:
                yield self.get()
            except queue.Empty:
                return

    def close(self) -> None:
        if self.closed:
            return
        self._closed.set()
        self.bus.unsubscribe(self)
        # Wake any consumer blocked in get()
        self._queue.put_nowait(_CLOSED)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class NotificationBus:
    """Process-wide publish/subscribe registry."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[Subscription]] = defaultdict(list)
        self._lock = threading.Lock()
        self._shutdown = False

    def _check_topic(self, topic: str) -> None:
        if topic not in ALL_TOPICS:
            raise ValueError(f"Topic '{topic}' is not a valid topic. Valid topics: {ALL_TOPICS}")

    def subscribe(self, topic: str) -> Subscription:
        self._check_topic(topic)
        subscription = Subscription(self, topic)
        with self._lock:
            if self._shutdown:
                raise RuntimeError("Notification bus has been shut down")
            self._subscriptions[topic].append(subscription)
        logger.debug("New subscription on topic %s", topic)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            registered = self._subscriptions.get(subscription.topic, [])
            if subscription in registered:
                registered.remove(subscription)
        if not subscription.closed:
            subscription.close()

    def publish(self, topic: str, event: RiderEvent) -> None:
        """Hand ``event`` to every current subscriber of ``topic``."""
        self._check_topic(topic)
        with self._lock:
            subscribers = list(self._subscriptions.get(topic, []))
        for subscription in subscribers:
            subscription.deliver(event)
        logger.debug(
            "Published %s on topic %s to %d subscribers",
            event.kind.value,
            topic,
            len(subscribers),
            extra={"event": event.kind.value, "topic": topic},
        )

    def subscriber_count(self, topic: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(topic, []))

    def shutdown(self) -> None:
        """Close every subscription and refuse new ones."""
        with self._lock:
            self._shutdown = True
            subscriptions = [s for subs in self._subscriptions.values() for s in subs]
        for subscription in subscriptions:
            subscription.close()

    def __enter__(self) -> "NotificationBus":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()
