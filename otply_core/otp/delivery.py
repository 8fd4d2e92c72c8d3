"""
Code Delivery
=============
Out-of-band delivery of issued codes.

The authenticator dispatches delivery as a background task after the
session is stored and never waits on the outcome.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
import structlog

from ..identifiers import mask_identifier

logger = structlog.get_logger(__name__)


class DeliveryError(Exception):
    """Raised when a delivery channel rejects a code."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def format_otp_message(code: str, expiry_seconds: int) -> str:
    """User-facing text for an issued code."""
    return f"Your OTP is {code}. It expires in {expiry_seconds} seconds."


class CodeDelivery(ABC):
    """Channel that puts a code in front of the user (SMS, email, ...)."""

    name: str = "base"

    @abstractmethod
    async def deliver(self, identifier: str, code: str, expiry_seconds: int) -> None:
        """
        Send a code to the user.

        Args:
            identifier: Normalized email or phone
            code: The issued code
            expiry_seconds: Validity window, for the message text
        """

    async def close(self) -> None:
        """Release channel resources."""


class LogDelivery(CodeDelivery):
    """
    Development delivery that only logs a notice.

    ``delay_seconds`` simulates a slow carrier, e.g. for SMS autofill demos.
    """

    name = "log"

    def __init__(self, delay_seconds: float = 0.0):
        self.delay_seconds = delay_seconds

    async def deliver(self, identifier: str, code: str, expiry_seconds: int) -> None:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        logger.info(
            "otp_delivery_simulated",
            recipient=mask_identifier(identifier),
            expires_in=expiry_seconds,
        )


class WebhookDelivery(CodeDelivery):
    """
    Posts codes to an HTTP endpoint owned by a messaging gateway.

    Payload: ``{"to": ..., "message": ..., "expires_in": ...}``.
    """

    name = "webhook"

    def __init__(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(headers=headers or {}, timeout=timeout)

    async def deliver(self, identifier: str, code: str, expiry_seconds: int) -> None:
        payload: Dict[str, Any] = {
            "to": identifier,
            "message": format_otp_message(code, expiry_seconds),
            "expires_in": expiry_seconds,
        }
        try:
            response = await self._client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            raise DeliveryError(f"Delivery request failed: {e}") from e

        if response.status_code >= 400:
            raise DeliveryError(
                f"Delivery rejected with status {response.status_code}",
                status_code=response.status_code,
            )

        logger.info(
            "otp_delivery_sent",
            channel=self.name,
            recipient=mask_identifier(identifier),
            status_code=response.status_code,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
