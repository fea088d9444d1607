"""Logging and request metrics for the contact service."""

from __future__ import annotations

from twins.observability.logging import configure_logging
from twins.observability.metrics import (
    CONTACT_SUBMISSIONS,
    MetricsMiddleware,
    metrics_response,
)

__all__ = [
    "CONTACT_SUBMISSIONS",
    "MetricsMiddleware",
    "configure_logging",
    "metrics_response",
]
