import json
import logging
from typing import Any

import redis
from redis.exceptions import ConnectionError

from rider_directory.pubsub.channels import ALL_TOPICS

logger = logging.getLogger(__name__)


class RedisPublisher:
    """Synchronous Redis publisher mirroring bus topics to Redis channels."""

    def __init__(self, config: dict[str, Any]):
        self.config = config
        self._client = redis.Redis(
            host=config["host"],
            port=config["port"],
            db=config["db"],
            password=config.get("password"),
            ssl=config.get("ssl", False),
            decode_responses=True,
        )

    def publish_sync(self, channel: str, message: dict[str, Any]) -> None:
        if channel not in ALL_TOPICS:
            raise ValueError(
                f"Channel '{channel}' is not a valid channel. Valid channels: {ALL_TOPICS}"
            )

        try:
            json_message = json.dumps(message)
            self._client.publish(channel, json_message)
        except ConnectionError as e:
            logger.error(f"Failed to publish to channel {channel}: {e}")

    def close(self) -> None:
        self._client.close()
