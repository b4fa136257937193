"""GitHub webhook verification middleware for Starlette applications."""

from hubhook.models.config import ConfigurationError, WebhookOptions
from hubhook.models.event import WebhookEvent
from hubhook.webhook.handler import GithubWebhook
from hubhook.webhook.middleware import WebhookMiddleware

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "GithubWebhook",
    "WebhookEvent",
    "WebhookMiddleware",
    "WebhookOptions",
    "__version__",
]
