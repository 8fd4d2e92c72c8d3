"""
OTP Generation
==============
Code minting and comparison.
"""

import hmac
import secrets

CODE_MIN = 100000
CODE_MAX = 999999


def generate_otp() -> str:
    """Generate a 6-digit numeric code, uniform over 100000-999999."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def codes_match(submitted: str, expected: str) -> bool:
    """
    Compare a submitted code against the issued one.

    Uses constant-time comparison to prevent timing attacks.
    """
    return hmac.compare_digest(submitted.encode(), expected.encode())
