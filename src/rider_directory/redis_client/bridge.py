"""Forwards bus events to Redis so other processes can observe them."""

import logging
import queue
import threading

from rider_directory.pubsub.bus import NotificationBus, Subscription
from rider_directory.pubsub.channels import TOPIC_RIDERS

from .publisher import RedisPublisher

logger = logging.getLogger(__name__)


class RedisEventBridge:
    """Subscribes to a bus topic and republishes each event on Redis.

    Runs on its own thread so a slow or unreachable Redis never delays the
    repository that published the event.
    """

    def __init__(
        self,
        bus: NotificationBus,
        publisher: RedisPublisher,
        topic: str = TOPIC_RIDERS,
        poll_interval: float = 0.5,
    ):
        self.bus = bus
        self.publisher = publisher
        self.topic = topic
        self.poll_interval = poll_interval
        self._subscription: Subscription | None = None
        self._thread: threading.Thread | None = None
        self._stopping = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stopping.clear()
        self._subscription = self.bus.subscribe(self.topic)
        self._thread = threading.Thread(
            target=self._forward_loop,
            args=(self._subscription,),
            name=f"redis-bridge-{self.topic}",
            daemon=True,
        )
        self._thread.start()
        logger.info("Mirroring topic %s to Redis", self.topic)

    def stop(self, timeout: float = 5.0) -> None:
        self._stopping.set()
        if self._subscription is not None:
            self._subscription.close()
        if self._thread is not None:
            self._thread.join(timeout)
        self._subscription = None
        self._thread = None

    def _forward_loop(self, subscription: Subscription) -> None:
        while not self._stopping.is_set():
            try:
                event = subscription.get(timeout=self.poll_interval)
            except queue.Empty:
                if subscription.closed:
                    break
                continue

            try:
                self.publisher.publish_sync(self.topic, event.to_message())
            except Exception:
                logger.exception("Failed to mirror %s to Redis", event.kind.value)
