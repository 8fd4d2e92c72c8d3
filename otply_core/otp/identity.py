"""
Identity Synthesis
==================
Maps a normalized identifier to a display identity.

This stands in for a user-directory lookup. Pass a different
``IdentityResolver`` to the authenticator to resolve real accounts.
"""

from typing import Callable

from ..identifiers import is_valid_email
from .models import AuthIdentity, AuthProvider

IdentityResolver = Callable[[str], AuthIdentity]

DEFAULT_DISPLAY_NAME = "User"


def synthesize_identity(identifier: str) -> AuthIdentity:
    """
    Derive a display identity from a normalized identifier.

    Emails get a capitalized local part as the name; phones get a
    generic name.
    """
    if is_valid_email(identifier):
        local_part = identifier.split('@', 1)[0]
        name = local_part[:1].upper() + local_part[1:] if local_part else DEFAULT_DISPLAY_NAME
        return AuthIdentity(
            id=f"user_{identifier}",
            name=name,
            email=identifier,
            provider=AuthProvider.OTP,
        )
    return AuthIdentity(
        id=f"user_{identifier}",
        name=DEFAULT_DISPLAY_NAME,
        phone=identifier,
        provider=AuthProvider.OTP,
    )
