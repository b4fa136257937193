"""Verified webhook event model."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class WebhookEvent:
    """A delivery that passed signature and header checks.

    Built once per accepted request and handed to every matching listener.
    """

    event: str
    id: str
    payload: Any
    protocol: str
    host: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        """Return the event as a plain dictionary."""
        return asdict(self)
