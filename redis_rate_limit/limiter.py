"""
Core Rate Limiter Implementation

Fixed window counter shared by every process talking to the same Redis.
The whole read/increment/expire/compare step runs inside one Lua script,
so concurrent callers never lose or double-count a hit.
"""

import logging
from pathlib import Path
from typing import Any, NamedTuple, Optional, Union

import redis
import redis.asyncio

from .errors import ConfigurationError, DecodeError, TransportError

logger = logging.getLogger(__name__)

# Keys already written by existing deployments use this prefix.
KEY_PREFIX = 'go-rate-limit-redis'

_lua_script_path = Path(__file__).parent / 'rate_limiter.lua'


def tracker_key(tracker: str) -> str:
    """
    Build the Redis key holding the counter for a tracker.

    Args:
        tracker: Caller-chosen identity (IP address, user id, API key...)

    Returns:
        "go-rate-limit-redis:tracker:<tracker>"
    """
    if not isinstance(tracker, str) or not tracker:
        raise ValueError("tracker must be a non-empty string")
    return f"{KEY_PREFIX}:tracker:{tracker}"


class ScriptResult(NamedTuple):
    """Reply of the counter script: an integer, or absent (Redis nil)."""

    value: Optional[int]

    @property
    def absent(self) -> bool:
        return self.value is None

    @property
    def breached(self) -> bool:
        return self.value is not None and self.value != 0


def decode_script_result(raw: Any) -> ScriptResult:
    if raw is None:
        return ScriptResult(None)
    # bool is an int subclass but never a valid script reply
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise DecodeError(f"unexpected result type from Lua script: {type(raw).__name__}")
    return ScriptResult(raw)


def _load_script_source() -> str:
    try:
        with open(_lua_script_path, 'r') as f:
            source = f.read()
    except OSError as e:
        raise ConfigurationError(f"failed to read lua script file: {e}") from e

    if not source.strip():
        raise ConfigurationError(f"lua script file is empty: {_lua_script_path}")
    return source


def _validate_policy_value(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {value}")
    return value


class _BaseRateLimiter:
    def __init__(
        self,
        client: Union[redis.Redis, redis.asyncio.Redis],
        max_allowed_hits: int,
        window_seconds: int,
    ) -> None:
        self._max_allowed_hits = _validate_policy_value('max_allowed_hits', max_allowed_hits)
        self._window_seconds = _validate_policy_value('window_seconds', window_seconds)
        self._client = client
        # register_script only hashes the source; nothing is sent to Redis yet
        self._script = client.register_script(_load_script_source())

    @property
    def max_allowed_hits(self) -> int:
        return self._max_allowed_hits

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    def _script_args(self, tracker: str) -> dict:
        return {
            'keys': [tracker_key(tracker)],
            'args': [self._max_allowed_hits, self._window_seconds],
        }

    def _decide(self, tracker: str, raw: Any) -> bool:
        result = decode_script_result(raw)
        if result.absent:
            # The script always returns an integer; a nil reply is a client quirk.
            logger.warning("Rate limit script returned nil for tracker %r, allowing request", tracker)
            return True
        return not result.breached

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(max_allowed_hits={self._max_allowed_hits}, "
            f"window_seconds={self._window_seconds})"
        )


class RateLimiter(_BaseRateLimiter):
    """
    Fixed window rate limiter backed by a synchronous redis-py client.

    Safe to share between threads; it holds no state besides the policy.
    """

    def allow(self, tracker: str) -> bool:
        """
        Count one hit for the tracker and decide whether it may proceed.

        Args:
            tracker: Identity being rate limited

        Returns:
            True if allowed, False if the limit for the current window is exceeded

        Raises:
            TransportError: Redis failed; the decision is unknown
            DecodeError: The script replied with an unexpected type
        """
        kwargs = self._script_args(tracker)
        try:
            raw = self._script(**kwargs)
        except redis.RedisError as e:
            raise TransportError(f"failed to execute Lua script: {e}") from e
        return self._decide(tracker, raw)


class AsyncRateLimiter(_BaseRateLimiter):
    """
    Fixed window rate limiter backed by a redis.asyncio client.

    Cancelling the awaiting task (or asyncio.wait_for) aborts the call;
    the script either ran in full on the server or not at all.
    """

    async def allow(self, tracker: str) -> bool:
        kwargs = self._script_args(tracker)
        try:
            raw = await self._script(**kwargs)
        except redis.RedisError as e:
            raise TransportError(f"failed to execute Lua script: {e}") from e
        return self._decide(tracker, raw)
