"""
OTP Authentication
==================
One-time passcode sessions with cooldown, expiry and brute-force protection.
"""

from .models import AuthProvider, AuthIdentity, AuthResult, CodeIssued, OTPSession
from .errors import (
    OTPErrorKind,
    OTPError,
    InvalidIdentifier,
    RateLimited,
    NotRequested,
    TooManyAttempts,
    Expired,
    InvalidCode,
)
from .clock import Clock, SystemClock, ManualClock
from .generator import generate_otp, codes_match
from .store import SessionStore, InMemorySessionStore, RedisSessionStore
from .delivery import CodeDelivery, LogDelivery, WebhookDelivery, DeliveryError, format_otp_message
from .identity import IdentityResolver, synthesize_identity
from .tokens import TokenIssuer, issue_session_token
from .providers import IdentityProvider, DemoGoogleProvider
from .authenticator import OTPAuthenticator

__all__ = [
    # Models
    "AuthProvider",
    "AuthIdentity",
    "AuthResult",
    "CodeIssued",
    "OTPSession",
    # Errors
    "OTPErrorKind",
    "OTPError",
    "InvalidIdentifier",
    "RateLimited",
    "NotRequested",
    "TooManyAttempts",
    "Expired",
    "InvalidCode",
    # Clock
    "Clock",
    "SystemClock",
    "ManualClock",
    # Generation
    "generate_otp",
    "codes_match",
    # Stores
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
    # Delivery
    "CodeDelivery",
    "LogDelivery",
    "WebhookDelivery",
    "DeliveryError",
    "format_otp_message",
    # Identity
    "IdentityResolver",
    "synthesize_identity",
    "TokenIssuer",
    "issue_session_token",
    "IdentityProvider",
    "DemoGoogleProvider",
    # Authenticator
    "OTPAuthenticator",
]
