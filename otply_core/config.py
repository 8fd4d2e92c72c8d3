"""
OTP Configuration
=================
Timing and attempt limits for the OTP flow, overridable from the environment.
"""

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

DEFAULT_EXPIRY_SECONDS = 120
DEFAULT_RESEND_SECONDS = 60
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_RATE_LIMIT_WINDOW_MS = 5 * 60 * 1000

# Environment variable for each config field
ENV_VARS = {
    "expiry_seconds": "OTP_EXPIRY_SECONDS",
    "resend_seconds": "OTP_RESEND_SECONDS",
    "max_attempts": "OTP_MAX_ATTEMPTS",
    "rate_limit_window_ms": "OTP_RATE_LIMIT_WINDOW_MS",
}


@dataclass(frozen=True)
class OTPConfig:
    """
    OTP timing and attempt limits.

    ``max_attempts`` is shared: it caps code requests per window, verify
    calls per window, and wrong codes per issued code.
    """
    expiry_seconds: int = DEFAULT_EXPIRY_SECONDS
    resend_seconds: int = DEFAULT_RESEND_SECONDS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    rate_limit_window_ms: int = DEFAULT_RATE_LIMIT_WINDOW_MS

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{f.name} must be a positive integer, got {value!r}")

    @property
    def expiry_ms(self) -> int:
        return self.expiry_seconds * 1000

    @property
    def rate_limit_window_seconds(self) -> int:
        return -(-self.rate_limit_window_ms // 1000)

    @property
    def session_ttl_seconds(self) -> int:
        """Lifetime a stored session needs to outlive its code, cooldown and rate-limit window."""
        # One extra second keeps the session readable at exactly expires_at
        return max(self.expiry_seconds, self.resend_seconds, self.rate_limit_window_seconds) + 1

    @property
    def resend_ms(self) -> int:
        return self.resend_seconds * 1000

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "OTPConfig":
        """
        Build a config from environment variables.

        Unset, non-numeric or fractional values fall back to the defaults.
        Integral floats such as ``"300.0"`` or ``"3e5"`` are accepted.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)
        """
        environ = os.environ if environ is None else environ
        overrides = {}
        for field_name, env_var in ENV_VARS.items():
            raw = environ.get(env_var)
            if raw is None:
                continue
            try:
                value = float(raw)
            except ValueError:
                continue
            if not value.is_integer():
                continue
            overrides[field_name] = int(value)
        return cls(**overrides)
