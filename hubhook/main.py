"""Local development server for the webhook middleware."""

from __future__ import annotations

import os
from pathlib import Path

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request  # noqa: TC002
from starlette.responses import JSONResponse
from starlette.routing import Route

from hubhook import __version__
from hubhook.models.event import WebhookEvent  # noqa: TC001
from hubhook.utils.config_loader import load_options
from hubhook.utils.logging import configure_logging, get_logger
from hubhook.webhook.handler import GithubWebhook
from hubhook.webhook.middleware import WebhookMiddleware

logger = get_logger("main")


async def health_route(request: Request) -> JSONResponse:
    """Handle health check requests."""
    del request  # unused but required by Starlette routing
    return JSONResponse({"status": "healthy", "version": __version__})


def log_delivery(event: WebhookEvent) -> None:
    """Log every verified delivery."""
    logger.info(
        "Delivery received",
        extra={"event_type": event.event, "delivery_id": event.id, "host": event.host},
    )


def create_app(webhook: GithubWebhook) -> Starlette:
    """Build a Starlette application with the webhook mounted in front of it.

    Args:
        webhook: Configured webhook.

    Returns:
        Starlette application.
    """
    return Starlette(
        routes=[Route("/health", health_route, methods=["GET"])],
        middleware=[Middleware(WebhookMiddleware, webhook=webhook)],
    )


def main() -> None:
    """Serve the webhook with uvicorn using options from the environment."""
    import uvicorn

    configure_logging()

    config_file = os.environ.get("HUBHOOK_CONFIG")
    webhook = GithubWebhook(load_options(Path(config_file) if config_file else None))
    webhook.on("*", log_delivery)

    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "3000"))
    logger.info(
        "Starting hubhook",
        extra={"version": __version__, "host": host, "port": port, "path": webhook.options.path},
    )
    uvicorn.run(create_app(webhook), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
