"""ASGI middleware mounting a GithubWebhook in front of an application."""

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from hubhook.webhook.handler import GithubWebhook


class WebhookMiddleware:
    """Answers deliveries for the webhook path and passes everything else on.

    Usage::

        Starlette(routes=..., middleware=[Middleware(WebhookMiddleware, webhook=webhook)])
    """

    def __init__(self, app: ASGIApp, webhook: GithubWebhook) -> None:
        self.app = app
        self.webhook = webhook

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        response = await self.webhook.handle(request)

        if response is None:
            await self.app(scope, receive, send)
            return

        await response(scope, receive, send)
