"""
Rate Limiting
=============
Sliding window rate limiting for OTP requests and verifications.
"""

from .models import RateLimitResult, RateLimitInfo
from .sliding_window import SlidingWindowLimiter, prune_window

__all__ = [
    # Models
    "RateLimitResult",
    "RateLimitInfo",
    # Limiters
    "SlidingWindowLimiter",
    "prune_window",
]
