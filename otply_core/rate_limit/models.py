"""
Rate Limit Models
=================
Data models for rate limiting results.
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class RateLimitResult(str, Enum):
    """Rate limit decision result."""
    ALLOWED = "allowed"
    BLOCKED = "blocked"


@dataclass
class RateLimitInfo:
    """Sliding window check result with quota information."""
    allowed: bool
    count: int
    limit: int
    reset_at: int  # Epoch ms when the oldest entry leaves the window
    retry_after_ms: Optional[int] = None

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)

    @property
    def result(self) -> RateLimitResult:
        return RateLimitResult.ALLOWED if self.allowed else RateLimitResult.BLOCKED
