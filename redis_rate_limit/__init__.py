"""
Redis Rate Limit

A fixed window rate limiter shared across processes through Redis,
with the counter kept atomic by a server-side Lua script.
"""

from .errors import ConfigurationError, DecodeError, RateLimiterError, TransportError
from .limiter import KEY_PREFIX, AsyncRateLimiter, RateLimiter, ScriptResult, tracker_key

__all__ = [
    'RateLimiter',
    'AsyncRateLimiter',
    'ScriptResult',
    'tracker_key',
    'KEY_PREFIX',
    'RateLimiterError',
    'ConfigurationError',
    'TransportError',
    'DecodeError',
]
