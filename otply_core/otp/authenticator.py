"""
OTP Authenticator
=================
Session state machine for requesting and verifying one-time passcodes.
"""

import asyncio
from typing import Optional, Set

import structlog

from ..config import OTPConfig
from ..identifiers import is_valid_identifier, mask_identifier, normalize_identifier
from ..rate_limit import SlidingWindowLimiter
from .clock import Clock, SystemClock
from .delivery import CodeDelivery, LogDelivery
from .errors import (
    Expired,
    InvalidCode,
    InvalidIdentifier,
    NotRequested,
    RateLimited,
    TooManyAttempts,
)
from .generator import codes_match, generate_otp
from .identity import IdentityResolver, synthesize_identity
from .locks import KeyedLock
from .models import AuthResult, CodeIssued, OTPSession
from .store import InMemorySessionStore, SessionStore
from .tokens import TokenIssuer, issue_session_token

logger = structlog.get_logger(__name__)


class OTPAuthenticator:
    """
    Issues and verifies one-time passcodes, one session per identifier.

    Every call reads the clock once. Updates to a single identifier are
    serialized; delivery runs as a background task after the session
    has been stored.
    """

    def __init__(
        self,
        config: Optional[OTPConfig] = None,
        store: Optional[SessionStore] = None,
        delivery: Optional[CodeDelivery] = None,
        clock: Optional[Clock] = None,
        identity_resolver: IdentityResolver = synthesize_identity,
        token_issuer: TokenIssuer = issue_session_token,
    ):
        self.config = config if config is not None else OTPConfig()
        self.clock = clock if clock is not None else SystemClock()
        self.store = store if store is not None else InMemorySessionStore(clock=self.clock)
        self.delivery = delivery if delivery is not None else LogDelivery()
        self.identity_resolver = identity_resolver
        self.token_issuer = token_issuer
        self.limiter = SlidingWindowLimiter(
            rate=self.config.max_attempts,
            window_ms=self.config.rate_limit_window_ms,
        )
        self._locks = KeyedLock()
        self._pending: Set[asyncio.Task] = set()

    async def request_code(self, raw_identifier: str) -> CodeIssued:
        """
        Issue a code for an identifier, or report the live one during cooldown.

        Args:
            raw_identifier: Email or phone as entered

        Returns:
            CodeIssued with resend and expiry timestamps (epoch ms)

        Raises:
            InvalidIdentifier: Not a plausible email or phone
            RateLimited: Too many requests in the current window
        """
        identifier = normalize_identifier(raw_identifier)
        if not is_valid_identifier(identifier):
            raise InvalidIdentifier()

        masked = mask_identifier(identifier)

        async with self._locks.hold(identifier):
            now = self.clock.now_ms()
            session = await self.store.get(identifier) or OTPSession(identifier=identifier)

            session.request_timestamps, info = self.limiter.hit(session.request_timestamps, now)
            if not info.allowed:
                await self.store.set(session, self.config.session_ttl_seconds)
                logger.warning(
                    "otp_request_rate_limited",
                    identifier=masked,
                    count=info.count,
                    limit=info.limit,
                )
                raise RateLimited(retry_after_ms=info.retry_after_ms)

            if session.in_cooldown(now):
                await self.store.set(session, self.config.session_ttl_seconds)
                logger.info(
                    "otp_cooldown_active",
                    identifier=masked,
                    resend_available_at=session.resend_available_at,
                )
                return CodeIssued(
                    resend_available_at=session.resend_available_at,
                    expires_at=session.expires_at,
                )

            code = generate_otp()
            session.code = code
            session.expires_at = now + self.config.expiry_ms
            session.resend_available_at = now + self.config.resend_ms
            session.failed_verify_count = 0
            await self.store.set(session, self.config.session_ttl_seconds)

            issued = CodeIssued(
                resend_available_at=session.resend_available_at,
                expires_at=session.expires_at,
            )

        logger.info(
            "otp_code_issued",
            identifier=masked,
            channel=self.delivery.name,
            expires_in=self.config.expiry_seconds,
        )
        self._dispatch(identifier, code)
        return issued

    async def verify_code(self, raw_identifier: str, submitted_code: str) -> AuthResult:
        """
        Check a submitted code and, on success, consume the session.

        Args:
            raw_identifier: Email or phone as entered
            submitted_code: Code typed by the user

        Returns:
            AuthResult with an opaque token and the resolved identity

        Raises:
            NotRequested: No live session for this identifier
            TooManyAttempts: Verify window exceeded or wrong-code ceiling hit
            Expired: The code's validity window has passed
            InvalidCode: Wrong code, attempts remain
        """
        identifier = normalize_identifier(raw_identifier)
        masked = mask_identifier(identifier)

        async with self._locks.hold(identifier):
            now = self.clock.now_ms()
            session = await self.store.get(identifier)
            if session is None or not session.has_code:
                raise NotRequested()

            session.verify_timestamps, info = self.limiter.hit(session.verify_timestamps, now)
            if not info.allowed:
                await self.store.set(session, self.config.session_ttl_seconds)
                logger.warning(
                    "otp_verify_rate_limited",
                    identifier=masked,
                    count=info.count,
                    limit=info.limit,
                )
                raise TooManyAttempts(retry_after_ms=info.retry_after_ms)

            # Expiry wins over a matching code
            if session.is_expired(now):
                await self.store.delete(identifier)
                logger.info("otp_expired", identifier=masked, expired_at=session.expires_at)
                raise Expired()

            if not codes_match(submitted_code, session.code):
                session.failed_verify_count += 1
                if session.failed_verify_count >= self.config.max_attempts:
                    await self.store.delete(identifier)
                    logger.warning(
                        "otp_attempts_exhausted",
                        identifier=masked,
                        failed=session.failed_verify_count,
                    )
                    raise TooManyAttempts()

                await self.store.set(session, self.config.session_ttl_seconds)
                remaining = self.config.max_attempts - session.failed_verify_count
                logger.info("otp_invalid_code", identifier=masked, remaining=remaining)
                raise InvalidCode(attempts_remaining=remaining)

            await self.store.delete(identifier)

        identity = self.identity_resolver(identifier)
        token = self.token_issuer(identity, now)
        logger.info("otp_verified", identifier=masked, user_id=identity.id)
        return AuthResult(token=token, identity=identity)

    def _dispatch(self, identifier: str, code: str) -> None:
        task = asyncio.create_task(self._deliver(identifier, code))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, identifier: str, code: str) -> None:
        try:
            await self.delivery.deliver(identifier, code, self.config.expiry_seconds)
        except Exception as e:
            # Delivery is best effort; the code stays valid either way
            logger.error(
                "otp_delivery_failed",
                identifier=mask_identifier(identifier),
                channel=self.delivery.name,
                error=str(e),
            )

    async def drain(self) -> None:
        """Wait for in-flight deliveries."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        """Wait for in-flight deliveries and release the delivery channel."""
        await self.drain()
        await self.delivery.close()
