"""
Session Stores
==============
Storage backends for OTP sessions, keyed by normalized identifier.
"""

import json
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

import structlog

from .clock import Clock, SystemClock
from .models import OTPSession

logger = structlog.get_logger(__name__)


class SessionStore(ABC):
    """Get/set/delete of OTP sessions by normalized identifier."""

    @abstractmethod
    async def get(self, identifier: str) -> Optional[OTPSession]:
        """Return the session for ``identifier``, or None."""

    @abstractmethod
    async def set(self, session: OTPSession, ttl_seconds: Optional[int] = None) -> None:
        """
        Create or replace the session stored under ``session.identifier``.

        Args:
            session: Session to store
            ttl_seconds: How long the session must survive from now;
                backends fall back to their own default when omitted
        """

    @abstractmethod
    async def delete(self, identifier: str) -> None:
        """Remove the session for ``identifier`` if present."""


class InMemorySessionStore(SessionStore):
    """
    Dict-backed session store.

    Entries expire ``ttl_seconds`` after their last write; expired entries
    are swept on every write so abandoned identifiers do not pile up.
    For a single process only. Use RedisSessionStore when running more
    than one.
    """

    def __init__(self, ttl_seconds: int = 600, clock: Optional[Clock] = None):
        self.ttl_seconds = ttl_seconds
        self.clock = clock if clock is not None else SystemClock()
        self._sessions: Dict[str, Tuple[OTPSession, int]] = {}

    async def get(self, identifier: str) -> Optional[OTPSession]:
        entry = self._sessions.get(identifier)
        if entry is None:
            return None
        session, deadline = entry
        if self.clock.now_ms() > deadline:
            del self._sessions[identifier]
            return None
        return session

    async def set(self, session: OTPSession, ttl_seconds: Optional[int] = None) -> None:
        now = self.clock.now_ms()
        self._cleanup(now)
        ttl = ttl_seconds if ttl_seconds is not None else self.ttl_seconds
        self._sessions[session.identifier] = (session, now + ttl * 1000)

    async def delete(self, identifier: str) -> None:
        self._sessions.pop(identifier, None)

    def _cleanup(self, now_ms: int) -> None:
        """Remove expired sessions."""
        expired = [
            identifier for identifier, (_, deadline) in self._sessions.items()
            if now_ms > deadline
        ]
        for identifier in expired:
            del self._sessions[identifier]
        if expired:
            logger.debug("otp_sessions_evicted", count=len(expired))

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._sessions


class RedisSessionStore(SessionStore):
    """
    Redis-backed session store.

    Each session is one JSON document. Keys expire on their own so
    abandoned sessions do not accumulate.
    """

    def __init__(self, redis_client, ttl_seconds: int = 600, key_prefix: str = "otp:session"):
        """
        Args:
            redis_client: Async Redis client (``redis.asyncio.Redis``)
            ttl_seconds: Default key lifetime, used when ``set`` gets none
            key_prefix: Namespace for session keys
        """
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix

    def _key(self, identifier: str) -> str:
        return f"{self.key_prefix}:{identifier}"

    async def get(self, identifier: str) -> Optional[OTPSession]:
        raw = await self.redis.get(self._key(identifier))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()
        return OTPSession.from_dict(json.loads(raw))

    async def set(self, session: OTPSession, ttl_seconds: Optional[int] = None) -> None:
        payload = json.dumps(session.to_dict(), separators=(',', ':'))
        ttl = ttl_seconds if ttl_seconds is not None else self.ttl_seconds
        await self.redis.set(self._key(session.identifier), payload, ex=ttl)

    async def delete(self, identifier: str) -> None:
        await self.redis.delete(self._key(identifier))
