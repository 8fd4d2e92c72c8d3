"""
OTP Errors
==========
Closed set of OTP failure kinds.
"""

from enum import Enum
from typing import Optional


class OTPErrorKind(str, Enum):
    """Stable machine-readable failure kinds."""
    INVALID_IDENTIFIER = "invalid_identifier"
    RATE_LIMITED = "rate_limited"
    NOT_REQUESTED = "not_requested"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    EXPIRED = "expired"
    INVALID_CODE = "invalid_code"


class OTPError(Exception):
    """Base class for OTP failures. Callers switch on ``kind``."""

    kind: OTPErrorKind

    def __init__(self, message: Optional[str] = None, retry_after_ms: Optional[int] = None):
        super().__init__(message or self.kind.value)
        self.retry_after_ms = retry_after_ms


class InvalidIdentifier(OTPError):
    """Input is neither a plausible email nor phone number."""
    kind = OTPErrorKind.INVALID_IDENTIFIER


class RateLimited(OTPError):
    """Too many code requests in the current window."""
    kind = OTPErrorKind.RATE_LIMITED


class NotRequested(OTPError):
    """No active session for this identifier."""
    kind = OTPErrorKind.NOT_REQUESTED


class TooManyAttempts(OTPError):
    """Verify window exceeded or wrong-code ceiling reached."""
    kind = OTPErrorKind.TOO_MANY_ATTEMPTS


class Expired(OTPError):
    """The code's validity window has passed."""
    kind = OTPErrorKind.EXPIRED


class InvalidCode(OTPError):
    """Wrong code, attempts remain."""
    kind = OTPErrorKind.INVALID_CODE

    def __init__(self, attempts_remaining: int, message: Optional[str] = None):
        super().__init__(message)
        self.attempts_remaining = attempts_remaining

