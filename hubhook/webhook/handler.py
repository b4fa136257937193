"""Webhook request pipeline: scope guard, verification and dispatch."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

from hubhook.models.config import WebhookOptions
from hubhook.models.event import WebhookEvent
from hubhook.utils.logging import get_logger
from hubhook.webhook.dispatcher import EventDispatcher, Listener
from hubhook.webhook.headers import extract_delivery_headers
from hubhook.webhook.validators import ValidationError, verify_signature

logger = get_logger("webhook.handler")

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

ErrorListener = Callable[[Exception, Request], Any]


class ParseError(Exception):
    """Raised when a verified delivery body is not valid JSON."""

    pass


def _create_response(status_code: int, body: dict[str, Any]) -> Response:
    """Create a compact JSON response.

    Args:
        status_code: HTTP status code.
        body: Response body dictionary.

    Returns:
        Starlette response.
    """
    return Response(
        content=json.dumps(body, separators=(",", ":")),
        status_code=status_code,
        media_type=JSON_CONTENT_TYPE,
    )


def parse_payload(body: bytes) -> Any:
    """Decode a delivery body.

    Args:
        body: The raw request body bytes.

    Returns:
        The decoded JSON value.

    Raises:
        ParseError: If the body is not UTF-8 JSON or nests too deeply to decode.
    """
    try:
        return json.loads(body.decode("utf-8"))
    except (ValueError, RecursionError) as e:
        raise ParseError("invalid json") from e


class GithubWebhook:
    """Verifies GitHub deliveries for one path and emits them to listeners.

    Example::

        webhook = GithubWebhook({"path": "/webhook", "secret": "s3cret"})
        webhook.on("push", handle_push)
        app = Starlette(middleware=[Middleware(WebhookMiddleware, webhook=webhook)])
    """

    def __init__(self, options: WebhookOptions | Mapping[str, Any] | None = None) -> None:
        """Validate the options and create an empty listener registry.

        Args:
            options: WebhookOptions or a mapping with ``path`` and ``secret``.

        Raises:
            ConfigurationError: If options, path or secret are missing.
        """
        if not isinstance(options, WebhookOptions):
            options = WebhookOptions.from_mapping(options)

        self.options = options
        self.dispatcher = EventDispatcher()
        self._error_listeners: list[ErrorListener] = []

    def on(self, event_name: str, listener: Listener) -> None:
        """Register a listener for an event type (``*`` for all events)."""
        self.dispatcher.on(event_name, listener)

    def on_error(self, listener: ErrorListener) -> None:
        """Register a callback invoked with ``(error, request)`` on rejected deliveries."""
        self._error_listeners.append(listener)

    def in_scope(self, request: Request) -> bool:
        """Return whether the request targets the configured path."""
        return request.url.path == self.options.path

    async def handle(self, request: Request) -> Response | None:
        """Run one request through the pipeline.

        Args:
            request: The inbound request.

        Returns:
            The response to send, or None if the request is not for this webhook.
        """
        if not self.in_scope(request):
            return None

        if request.method != "POST":
            logger.info(
                "Rejecting non-POST request to webhook path",
                extra={"path": request.url.path, "method": request.method},
            )
            return _create_response(404, {"error": "not found"})

        try:
            event = await self._verify(request)
        except (ValidationError, ParseError) as e:
            logger.warning(
                "Webhook delivery rejected",
                extra={
                    "error": str(e),
                    "event_type": request.headers.get("x-github-event"),
                    "delivery_id": request.headers.get("x-github-delivery"),
                },
            )
            self._emit_error(e, request)
            return _create_response(400, {"error": str(e)})

        invoked = self.dispatcher.emit(event.event, event)
        logger.info(
            "Webhook delivery accepted",
            extra={
                "event_type": event.event,
                "delivery_id": event.id,
                "listeners": invoked,
            },
        )

        return _create_response(200, {"ok": True})

    async def _verify(self, request: Request) -> WebhookEvent:
        headers = extract_delivery_headers(request.headers, self.options.signature_header)

        body = await request.body()
        verify_signature(body, headers.signature, self.options.secret, self.options.algorithm)

        return WebhookEvent(
            event=headers.event,
            id=headers.delivery_id,
            payload=parse_payload(body),
            protocol=request.url.scheme,
            host=request.url.netloc,
            url=request.url.path,
        )

    def _emit_error(self, error: Exception, request: Request) -> None:
        for listener in list(self._error_listeners):
            try:
                listener(error, request)
            except Exception:
                logger.exception("Webhook error listener failed", extra={"error": str(error)})
