"""
OTPLY Core Library
==================
One-time passcode authentication: identifier handling, OTP sessions,
rate limiting and delivery.
"""

__version__ = "0.1.0"

# Config
from otply_core.config import OTPConfig

# Identifiers
from otply_core.identifiers import (
    is_valid_email,
    is_valid_phone,
    is_valid_identifier,
    normalize_identifier,
    mask_identifier,
)

# Rate Limiting
from otply_core.rate_limit import (
    SlidingWindowLimiter,
    RateLimitInfo,
    RateLimitResult,
    prune_window,
)

# OTP
from otply_core.otp import (
    OTPAuthenticator,
    OTPSession,
    CodeIssued,
    AuthIdentity,
    AuthResult,
    AuthProvider,
    OTPErrorKind,
    OTPError,
    InvalidIdentifier,
    RateLimited,
    NotRequested,
    TooManyAttempts,
    Expired,
    InvalidCode,
    Clock,
    SystemClock,
    ManualClock,
    SessionStore,
    InMemorySessionStore,
    RedisSessionStore,
    CodeDelivery,
    LogDelivery,
    WebhookDelivery,
    DeliveryError,
    IdentityProvider,
    DemoGoogleProvider,
    synthesize_identity,
    issue_session_token,
)

__all__ = [
    # Config
    "OTPConfig",
    # Identifiers
    "is_valid_email",
    "is_valid_phone",
    "is_valid_identifier",
    "normalize_identifier",
    "mask_identifier",
    # Rate Limiting
    "SlidingWindowLimiter",
    "RateLimitInfo",
    "RateLimitResult",
    "prune_window",
    # OTP
    "OTPAuthenticator",
    "OTPSession",
    "CodeIssued",
    "AuthIdentity",
    "AuthResult",
    "AuthProvider",
    "OTPErrorKind",
    "OTPError",
    "InvalidIdentifier",
    "RateLimited",
    "NotRequested",
    "TooManyAttempts",
    "Expired",
    "InvalidCode",
    "Clock",
    "SystemClock",
    "ManualClock",
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
    "CodeDelivery",
    "LogDelivery",
    "WebhookDelivery",
    "DeliveryError",
    "IdentityProvider",
    "DemoGoogleProvider",
    "synthesize_identity",
    "issue_session_token",
]
