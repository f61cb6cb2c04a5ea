"""
Example Usage of Rate Limiter

Sends 20 requests for one tracker, one per second, against a limiter
allowing 5 hits per 10 seconds. Requests 1-5 are allowed, the rest of
the window is rate limited, and the counter resets once the window expires.
"""

import logging
import sys
import time

from redis_rate_limit import RateLimiter, RateLimiterError
from redis_rate_limit.config import RATE_LIMIT_MAX_HITS, RATE_LIMIT_WINDOW_SECONDS, get_redis_client

logger = logging.getLogger(__name__)


def run(limiter: RateLimiter, tracker: str, requests: int = 20, interval: float = 1.0) -> None:
    for i in range(1, requests + 1):
        if limiter.allow(tracker):
            print(f"Request #{i} allowed")
        else:
            print(f"Request #{i} rate limited")
        time.sleep(interval)


def main() -> int:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    redis_client = get_redis_client()
    try:
        limiter = RateLimiter(redis_client, RATE_LIMIT_MAX_HITS, RATE_LIMIT_WINDOW_SECONDS)
    except RateLimiterError as e:
        logger.error("Could not initialize rate limiter: %s", e)
        redis_client.close()
        return 1

    try:
        run(limiter, "192.168.1.0")  # client IP, user ID, etc.
    except RateLimiterError as e:
        logger.error("Error checking rate limit: %s", e)
        return 1
    finally:
        redis_client.close()

    return 0


if __name__ == '__main__':
    sys.exit(main())
