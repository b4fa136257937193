"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from hubhook.webhook.handler import GithubWebhook
from hubhook.webhook.middleware import WebhookMiddleware

if TYPE_CHECKING:
    from collections.abc import Generator

    from starlette.requests import Request


@pytest.fixture(autouse=True)
def reset_env() -> Generator[None]:
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def webhook_secret() -> str:
    """Shared secret used to sign test deliveries."""
    return "myhashsecret"


@pytest.fixture
def sample_push_payload() -> dict[str, Any]:
    """Minimal push delivery body."""
    return {"some": "github", "object": "with", "properties": True}


@pytest.fixture
def webhook(webhook_secret: str) -> GithubWebhook:
    """Webhook mounted at /webhook."""
    return GithubWebhook({"path": "/webhook", "secret": webhook_secret})


async def _downstream(request: Request) -> PlainTextResponse:
    return PlainTextResponse(f"downstream {request.method} {request.url.path}")


@pytest.fixture
def app(webhook: GithubWebhook) -> Starlette:
    """Application with a catch-all downstream route behind the webhook."""
    return Starlette(
        routes=[Route("/{path:path}", _downstream, methods=["GET", "POST", "PUT", "DELETE"])],
        middleware=[Middleware(WebhookMiddleware, webhook=webhook)],
    )


@pytest.fixture
def client(app: Starlette) -> Generator[TestClient]:
    """Test client addressing the app as localhost:3000."""
    with TestClient(app, base_url="http://localhost:3000") as test_client:
        yield test_client
