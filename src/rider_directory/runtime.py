"""Process-level wiring: database, notification bus and Redis mirror."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from types import TracebackType
from typing import Any

from sqlalchemy.orm import sessionmaker

from .db.database import init_database
from .db.repositories.rider_repository import RiderRepository
from .directory_logging import setup_logging
from .pubsub.bus import NotificationBus, Subscription
from .pubsub.channels import TOPIC_RIDERS
from .redis_client.bridge import RedisEventBridge
from .redis_client.publisher import RedisPublisher
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


class DirectoryRuntime:
    """Owns the process-wide resources the rider directory needs.

    ``start`` builds the session factory and notification bus (and the Redis
    bridge when enabled); ``shutdown`` closes every subscription and stops
    the bridge. Repositories are handed out per unit of work.
    """

    def __init__(self, settings: Settings | None = None, configure_logging: bool = True):
        self.settings = settings or get_settings()
        self.configure_logging = configure_logging
        self.session_maker: sessionmaker[Any] | None = None
        self.bus: NotificationBus | None = None
        self.redis_publisher: RedisPublisher | None = None
        self.redis_bridge: RedisEventBridge | None = None

    @property
    def started(self) -> bool:
        return self.bus is not None

    def start(self) -> DirectoryRuntime:
        if self.started:
            return self

        directory = self.settings.directory
        if self.configure_logging:
            setup_logging(
                level=directory.log_level,
                json_output=directory.log_format == "json",
                environment=directory.environment,
            )

        self.session_maker = init_database(
            self.settings.database.url, echo=self.settings.database.echo
        )
        self.bus = NotificationBus()

        redis_settings = self.settings.redis
        if redis_settings.enabled:
            self.redis_publisher = RedisPublisher(redis_settings.model_dump())
            self.redis_bridge = RedisEventBridge(self.bus, self.redis_publisher)
            self.redis_bridge.start()

        logger.info("Rider directory started (redis mirror %s)", redis_settings.enabled)
        return self

    def _require_started(self) -> tuple[sessionmaker[Any], NotificationBus]:
        if self.session_maker is None or self.bus is None:
            raise RuntimeError("DirectoryRuntime.start() must be called first")
        return self.session_maker, self.bus

    @contextmanager
    def repository(self) -> Iterator[RiderRepository]:
        """Yield a rider repository bound to a fresh session."""
        session_maker, bus = self._require_started()
        with session_maker() as session:
            yield RiderRepository(session, bus, self.settings.directory)

    def subscribe(self) -> Subscription:
        _, bus = self._require_started()
        return bus.subscribe(TOPIC_RIDERS)

    def shutdown(self) -> None:
        if self.redis_bridge is not None:
            self.redis_bridge.stop()
            self.redis_bridge = None
        if self.redis_publisher is not None:
            self.redis_publisher.close()
            self.redis_publisher = None
        if self.bus is not None:
            self.bus.shutdown()
            self.bus = None
        if self.session_maker is not None:
            bind = self.session_maker.kw.get("bind")
            if bind is not None:
                bind.dispose()
            self.session_maker = None
        logger.info("Rider directory stopped")

    def __enter__(self) -> DirectoryRuntime:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()
