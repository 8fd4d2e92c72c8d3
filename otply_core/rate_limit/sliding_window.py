"""
Sliding Window Rate Limiter
===========================
Sliding window counting over a per-session list of event timestamps.
"""

from typing import List, Sequence, Tuple

from .models import RateLimitInfo


def prune_window(timestamps: Sequence[int], now_ms: int, window_ms: int) -> List[int]:
    """
    Drop timestamps that fell out of the trailing window.

    A timestamp is in the window iff ``ts >= now_ms - window_ms``.
    """
    cutoff = now_ms - window_ms
    return [ts for ts in timestamps if ts >= cutoff]


class SlidingWindowLimiter:
    """
    Sliding window limiter over caller-owned timestamp lists.

    The limiter itself is stateless; the timestamps live on whatever
    record is being limited (e.g. an OTP session), so counting stays
    atomic with the rest of that record's update.
    """

    def __init__(self, rate: int, window_ms: int):
        """
        Args:
            rate: Events allowed per window
            window_ms: Window size in milliseconds
        """
        if rate <= 0 or window_ms <= 0:
            raise ValueError("rate and window_ms must be positive")
        self.rate = rate
        self.window_ms = window_ms

    def hit(self, timestamps: Sequence[int], now_ms: int) -> Tuple[List[int], RateLimitInfo]:
        """
        Record an event at ``now_ms`` and check the window.

        The event is recorded even when the check fails, so repeated
        attempts keep the window saturated.

        Args:
            timestamps: Previously recorded event timestamps (epoch ms)
            now_ms: Current time (epoch ms)

        Returns:
            Tuple of (pruned timestamps including this event, RateLimitInfo)
        """
        window = prune_window([*timestamps, now_ms], now_ms, self.window_ms)
        count = len(window)
        reset_at = window[0] + self.window_ms

        if count > self.rate:
            # Blocked until enough entries age out to get back under the limit
            unblock_at = window[count - self.rate - 1] + self.window_ms
            return window, RateLimitInfo(
                allowed=False,
                count=count,
                limit=self.rate,
                reset_at=reset_at,
                retry_after_ms=max(0, unblock_at - now_ms + 1),
            )

        return window, RateLimitInfo(
            allowed=True,
            count=count,
            limit=self.rate,
            reset_at=reset_at,
        )
