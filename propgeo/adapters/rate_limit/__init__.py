"""Rate limit adapters - Implementations of RateLimiterPort.

Available implementations:
- MinIntervalRateLimiter: minimum spacing between consecutive calls
"""

from .min_interval import MinIntervalRateLimiter

__all__ = ["MinIntervalRateLimiter"]
