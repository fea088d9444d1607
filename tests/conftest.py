"""Test fixtures for the contact relay app."""

from __future__ import annotations

import os

# Set LOG_LEVEL *before* importing twins modules; settings are read and
# logging is configured at import time.
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from twins.main import app  # noqa: E402
from twins.routers.contact import get_relay  # noqa: E402
from twins.security.rate_limit import limiter  # noqa: E402
from twins.services.mailer import EmailDeliveryError  # noqa: E402
from twins.services.relay import ContactRelay  # noqa: E402

# Disable rate limiting in tests to prevent cross-test 429 flakes
limiter.enabled = False


class RecordingMailer:
    """Stands in for the provider: records messages, optionally fails."""

    def __init__(self):
        self.sent = []
        self.error: Exception | None = None

    def send(self, email):
        if self.error is not None:
            raise self.error
        self.sent.append(email)
        return f"msg-{len(self.sent)}"

    def fail_with(self, error: Exception | None = None) -> None:
        self.error = error or EmailDeliveryError("provider down")


@pytest.fixture
def recording_mailer():
    return RecordingMailer()


@pytest.fixture
def contact_relay(recording_mailer):
    return ContactRelay(
        mail=recording_mailer,
        sender="80k Twins Contact <no-reply@yourdomain.com>",
        recipients=["info@80ktwins.com", "kamar@80ktwins.com", "kiyel@80ktwins.com"],
    )


@pytest.fixture
def client(contact_relay):
    app.dependency_overrides[get_relay] = lambda: contact_relay
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_relay, None)
