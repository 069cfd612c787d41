from rider_directory.redis_client.bridge import RedisEventBridge
from rider_directory.redis_client.publisher import RedisPublisher

__all__ = ["RedisPublisher", "RedisEventBridge"]
