"""
OTP Models
==========
Data models and enums for OTP sessions and authentication results.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


class AuthProvider(str, Enum):
    """How an identity was authenticated."""
    OTP = "otp"
    GOOGLE = "google"


@dataclass
class AuthIdentity:
    """Display identity returned after a successful sign-in."""
    id: str
    name: str
    provider: AuthProvider = AuthProvider.OTP
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["provider"] = self.provider.value
        return data


@dataclass
class AuthResult:
    """Opaque session token plus the identity it belongs to."""
    token: str
    identity: AuthIdentity


@dataclass
class CodeIssued:
    """Timing metadata returned by a code request (epoch ms)."""
    resend_available_at: int
    expires_at: int


@dataclass
class OTPSession:
    """
    OTP state for one normalized identifier.

    All timestamps are epoch milliseconds.
    """
    identifier: str
    code: Optional[str] = None
    expires_at: int = 0
    resend_available_at: int = 0
    request_timestamps: List[int] = field(default_factory=list)
    verify_timestamps: List[int] = field(default_factory=list)
    failed_verify_count: int = 0

    @property
    def has_code(self) -> bool:
        return bool(self.code)

    def is_expired(self, now_ms: int) -> bool:
        return now_ms > self.expires_at

    def in_cooldown(self, now_ms: int) -> bool:
        return self.has_code and now_ms < self.resend_available_at

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OTPSession":
        return cls(
            identifier=data["identifier"],
            code=data.get("code"),
            expires_at=int(data.get("expires_at", 0)),
            resend_available_at=int(data.get("resend_available_at", 0)),
            request_timestamps=[int(ts) for ts in data.get("request_timestamps", [])],
            verify_timestamps=[int(ts) for ts in data.get("verify_timestamps", [])],
            failed_verify_count=int(data.get("failed_verify_count", 0)),
        )
