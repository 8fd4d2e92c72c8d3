"""
Session Tokens
==============
Opaque token minting for authenticated identities.
"""

import secrets
from typing import Callable

from .models import AuthIdentity

TokenIssuer = Callable[[AuthIdentity, int], str]


def issue_session_token(identity: AuthIdentity, now_ms: int) -> str:
    """
    Mint an opaque session token.

    Args:
        identity: The authenticated identity
        now_ms: Issue time (epoch ms)

    Returns:
        Token string; callers must treat it as opaque
    """
    return f"token_{identity.id}_{now_ms}_{secrets.token_hex(8)}"
