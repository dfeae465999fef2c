"""Redis connection and client management."""
import logging
from typing import Optional
from urllib.parse import urlparse

import redis.asyncio as redis

from ..config.settings import settings

logger = logging.getLogger(__name__)

# Global Redis client instance
redis_client: Optional[redis.Redis] = None


async def get_redis() -> redis.Redis:
    """Get Redis client instance."""
    global redis_client

    if redis_client is None:
        await init_redis()

    return redis_client


async def init_redis() -> None:
    """Initialize Redis connection pool."""
    global redis_client

    if redis_client is not None:
        return

    redis_url = settings.redis_url
    if not redis_url:
        raise ValueError("Redis URL not configured")

    # Parse Redis URL for connection parameters
    parsed_url = urlparse(redis_url)

    # Queue payloads are forwarded byte-for-byte, so responses stay undecoded.
    # The socket timeout must outlast the blocking pop timeout.
    client = redis.Redis(
        host=parsed_url.hostname or 'localhost',
        port=parsed_url.port or 6379,
        db=int(parsed_url.path[1:]) if parsed_url.path and len(parsed_url.path) > 1 else 0,
        password=parsed_url.password,
        username=parsed_url.username,
        ssl=parsed_url.scheme == "rediss",
        decode_responses=False,
        health_check_interval=30,
        socket_keepalive=True,
        socket_timeout=settings.pop_timeout_seconds + 5,
        retry_on_timeout=True,
        retry_on_error=[redis.BusyLoadingError, redis.ConnectionError, redis.TimeoutError],
        max_connections=10,
    )

    # Test the connection
    try:
        await client.ping()
        logger.info(f"✅ Redis connected to {parsed_url.hostname}:{parsed_url.port}")
    except Exception as e:
        logger.error(f"❌ Redis connection failed: {e}")
        raise

    redis_client = client


async def close_redis() -> None:
    """Close Redis connection."""
    global redis_client

    if redis_client is not None:
        await redis_client.aclose()
        redis_client = None
        logger.info("✅ Redis connection closed")


async def health_check() -> bool:
    """Check Redis health status."""
    try:
        client = await get_redis()
        await client.ping()
        return True
    except Exception as e:
        logger.warning(f"Redis health check failed: {e}")
        return False
