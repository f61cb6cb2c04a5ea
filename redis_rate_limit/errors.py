"""
Rate Limiter Errors
"""


class RateLimiterError(Exception):
    """Base class for every error raised by the rate limiter."""


class ConfigurationError(RateLimiterError):
    """The limiter could not be built: bad policy or unreadable script."""


class TransportError(RateLimiterError):
    """Redis could not run the counter script (network, timeout, script error).

    The decision is unknown; the caller picks fail-open or fail-closed.
    """


class DecodeError(RateLimiterError):
    """The counter script replied with something other than an integer."""
