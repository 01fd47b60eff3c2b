"""
Background workers for Flare Food.

Importing this package binds Dramatiq to the Redis broker named by
settings.redis_url. Actor modules import redis_broker before declaring
actors so correlation runs queued from the API land on that broker.
"""
import dramatiq
from dramatiq.brokers.redis import RedisBroker

from flarefood.config import settings

redis_broker = RedisBroker(url=settings.redis_url)
dramatiq.set_broker(redis_broker)
