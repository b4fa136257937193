"""Webhook configuration model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# Signature header GitHub sends for each supported digest
SIGNATURE_HEADERS = {
    "sha1": "x-hub-signature",
    "sha256": "x-hub-signature-256",
}


class ConfigurationError(Exception):
    """Raised when the webhook is constructed with unusable options."""

    pass


@dataclass(frozen=True)
class WebhookOptions:
    """Static configuration of one mounted webhook endpoint."""

    path: str
    secret: str
    algorithm: str = "sha1"

    def __post_init__(self) -> None:
        """Validate options eagerly so a bad instance is never usable."""
        if not self.path:
            raise ConfigurationError("missing path")

        if not self.secret:
            raise ConfigurationError("missing secret")

        for name in ("path", "secret", "algorithm"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigurationError(f"{name} must be a string, got {type(value).__name__}")

        if self.algorithm not in SIGNATURE_HEADERS:
            raise ConfigurationError(f"unsupported algorithm: {self.algorithm}")

    @property
    def signature_header(self) -> str:
        """Name of the request header carrying the signature."""
        return SIGNATURE_HEADERS[self.algorithm]

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> WebhookOptions:
        """Build options from a plain mapping such as ``{"path": ..., "secret": ...}``.

        Args:
            options: Mapping with ``path``, ``secret`` and optionally ``algorithm``.

        Returns:
            WebhookOptions instance.

        Raises:
            ConfigurationError: If the mapping is absent or a required key is missing.
        """
        if options is None:
            raise ConfigurationError("missing options")

        return cls(
            path=options.get("path") or "",
            secret=options.get("secret") or "",
            algorithm=options.get("algorithm") or "sha1",
        )
