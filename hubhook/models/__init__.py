"""Data models for hubhook."""

from hubhook.models.config import (
    SIGNATURE_HEADERS,
    ConfigurationError,
    WebhookOptions,
)
from hubhook.models.event import WebhookEvent

__all__ = [
    "SIGNATURE_HEADERS",
    "ConfigurationError",
    "WebhookEvent",
    "WebhookOptions",
]
