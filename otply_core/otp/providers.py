"""
Identity Providers
==================
Alternate sign-in paths that bypass the OTP flow and produce the same
``AuthResult`` shape.
"""

import asyncio
import os
from abc import ABC, abstractmethod
from typing import Optional

import structlog

from .clock import Clock, SystemClock
from .models import AuthIdentity, AuthProvider, AuthResult
from .tokens import TokenIssuer, issue_session_token

logger = structlog.get_logger(__name__)


class IdentityProvider(ABC):
    """Delegated authentication (OAuth and similar)."""

    provider: AuthProvider

    @abstractmethod
    async def sign_in(self) -> AuthResult:
        """Run the provider handshake and return a session."""


class DemoGoogleProvider(IdentityProvider):
    """
    Stand-in for Google sign-in.

    Returns a fixed demo account after a simulated network round trip.
    """

    provider = AuthProvider.GOOGLE

    def __init__(
        self,
        client_id: Optional[str] = None,
        latency_seconds: float = 0.7,
        clock: Optional[Clock] = None,
        token_issuer: TokenIssuer = issue_session_token,
    ):
        self.client_id = client_id or os.environ.get("GOOGLE_OAUTH_CLIENT_ID", "demo-google-client-id")
        self.latency_seconds = latency_seconds
        self.clock = clock if clock is not None else SystemClock()
        self.token_issuer = token_issuer

    async def sign_in(self) -> AuthResult:
        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)
        identity = AuthIdentity(
            id="google_12345",
            name="Google User",
            email="user@example.com",
            avatar_url="https://i.pravatar.cc/100?img=3",
            provider=self.provider,
        )
        logger.info("identity_provider_sign_in", provider=self.provider.value, client_id=self.client_id)
        return AuthResult(
            token=self.token_issuer(identity, self.clock.now_ms()),
            identity=identity,
        )
