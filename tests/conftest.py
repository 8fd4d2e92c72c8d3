import pytest

from otply_core.config import OTPConfig
from otply_core.otp import CodeDelivery, InMemorySessionStore, ManualClock, OTPAuthenticator

START_MS = 1_700_000_000_000


class RecordingDelivery(CodeDelivery):
    """Keeps every delivered code so tests can submit it."""

    name = "recording"

    def __init__(self):
        self.delivered = []

    async def deliver(self, identifier, code, expiry_seconds):
        self.delivered.append((identifier, code, expiry_seconds))


@pytest.fixture
def clock():
    return ManualClock(start_ms=START_MS)


@pytest.fixture
def config():
    return OTPConfig(
        expiry_seconds=120,
        resend_seconds=60,
        max_attempts=5,
        rate_limit_window_ms=5 * 60 * 1000,
    )


@pytest.fixture
def delivery():
    return RecordingDelivery()


@pytest.fixture
def store(clock):
    return InMemorySessionStore(clock=clock)


@pytest.fixture
def authenticator(config, store, delivery, clock):
    return OTPAuthenticator(config=config, store=store, delivery=delivery, clock=clock)
