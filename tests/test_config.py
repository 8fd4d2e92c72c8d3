"""
Unit Tests for OTP Configuration
================================
"""

import pytest

from otply_core.config import OTPConfig


class TestOTPConfig:
    """Tests for defaults, overrides and validation."""

    def test_defaults(self):
        """Should ship sane positive defaults."""
        config = OTPConfig()

        assert config.expiry_seconds == 120
        assert config.resend_seconds == 60
        assert config.max_attempts == 5
        assert config.rate_limit_window_ms == 300_000
        assert config.expiry_ms == 120_000
        assert config.resend_ms == 60_000

    def test_from_env(self):
        """Environment variables override defaults."""
        config = OTPConfig.from_env({
            "OTP_EXPIRY_SECONDS": "300",
            "OTP_RESEND_SECONDS": "30",
            "OTP_MAX_ATTEMPTS": "3",
            "OTP_RATE_LIMIT_WINDOW_MS": "60000",
        })

        assert config == OTPConfig(
            expiry_seconds=300,
            resend_seconds=30,
            max_attempts=3,
            rate_limit_window_ms=60_000,
        )

    def test_from_env_ignores_garbage(self):
        """Non-numeric values fall back to defaults."""
        config = OTPConfig.from_env({"OTP_MAX_ATTEMPTS": "lots"})

        assert config.max_attempts == 5

    def test_from_env_reads_os_environ(self, monkeypatch):
        """Without a mapping the process environment is used."""
        monkeypatch.setenv("OTP_RESEND_SECONDS", "15")

        assert OTPConfig.from_env().resend_seconds == 15

    @pytest.mark.parametrize("field", ["expiry_seconds", "resend_seconds", "max_attempts", "rate_limit_window_ms"])
    def test_rejects_non_positive(self, field):
        """Zero or negative limits are configuration errors."""
        with pytest.raises(ValueError):
            OTPConfig(**{field: 0})

    def test_unknown_field_rejected(self):
        """Code length is not configurable."""
        with pytest.raises(TypeError):
            OTPConfig(code_length=8)

    def test_from_env_accepts_integral_floats(self):
        """Float notation is fine as long as the value is whole."""
        config = OTPConfig.from_env({
            "OTP_EXPIRY_SECONDS": "300.0",
            "OTP_RATE_LIMIT_WINDOW_MS": "3e5",
        })

        assert config.expiry_seconds == 300
        assert config.rate_limit_window_ms == 300_000

    def test_from_env_ignores_fractions(self):
        """Fractional values fall back to defaults."""
        config = OTPConfig.from_env({"OTP_RESEND_SECONDS": "12.5"})

        assert config.resend_seconds == 60


class TestSessionTTL:
    """Tests for the lifetime stored sessions need."""

    def test_default_covers_rate_limit_window(self):
        assert OTPConfig().session_ttl_seconds == 301

    def test_long_expiry(self):
        assert OTPConfig(expiry_seconds=900).session_ttl_seconds == 901

    def test_long_window(self):
        assert OTPConfig(rate_limit_window_ms=3_600_000).session_ttl_seconds == 3601

    def test_window_rounds_up(self):
        """A partial second still needs covering."""
        config = OTPConfig(expiry_seconds=1, resend_seconds=1, rate_limit_window_ms=1_500)

        assert config.session_ttl_seconds == 3
