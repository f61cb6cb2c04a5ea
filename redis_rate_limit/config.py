import os
from typing import Optional

import redis
import redis.asyncio
from dotenv import load_dotenv
load_dotenv()

"""
Rate Limiter Configuration

Redis connection settings and the default fixed-window policy,
read from the environment (or a .env file).
"""


def _getenv_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _getenv_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if not value:
        return None
    return float(value)


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    return int(value)


REDIS_HOST = os.getenv('REDIS_HOST', 'localhost')
REDIS_PORT = _getenv_int('REDIS_PORT', 6379)
REDIS_DB = _getenv_int('REDIS_DB', 0)
REDIS_PASSWORD = os.getenv('REDIS_PASSWORD')
REDIS_SSL = _getenv_bool('REDIS_SSL')
REDIS_SOCKET_TIMEOUT = _getenv_float('REDIS_SOCKET_TIMEOUT')

# Default policy: (max_allowed_hits, window_seconds)
RATE_LIMIT_MAX_HITS = _getenv_int('RATE_LIMIT_MAX_HITS', 5)
RATE_LIMIT_WINDOW_SECONDS = _getenv_int('RATE_LIMIT_WINDOW_SECONDS', 10)


def get_redis_client() -> redis.Redis:
    """
    Build a Redis client from the environment settings.

    No connection is opened here; the first command connects.
    """
    return redis.Redis(
        host=REDIS_HOST,
        port=REDIS_PORT,
        db=REDIS_DB,
        password=REDIS_PASSWORD,
        ssl=REDIS_SSL,
        socket_timeout=REDIS_SOCKET_TIMEOUT,
        decode_responses=False,
    )


def get_async_redis_client() -> redis.asyncio.Redis:
    """Asyncio counterpart of get_redis_client()."""
    return redis.asyncio.Redis(
        host=REDIS_HOST,
        port=REDIS_PORT,
        db=REDIS_DB,
        password=REDIS_PASSWORD,
        ssl=REDIS_SSL,
        socket_timeout=REDIS_SOCKET_TIMEOUT,
        decode_responses=False,
    )
