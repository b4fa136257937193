"""Extraction of the GitHub delivery headers."""

from collections.abc import Mapping
from dataclasses import dataclass

from hubhook.webhook.validators import ValidationError

EVENT_HEADER = "x-github-event"
DELIVERY_HEADER = "x-github-delivery"


@dataclass(frozen=True)
class DeliveryHeaders:
    """The protocol headers every delivery must carry."""

    signature: str
    event: str
    delivery_id: str


def extract_delivery_headers(headers: Mapping[str, str], signature_header: str) -> DeliveryHeaders:
    """Pull the signature, event name and delivery id from request headers.

    Args:
        headers: Request headers. Starlette's ``Headers`` is case-insensitive;
            plain dicts must use lower-case keys.
        signature_header: Lower-case name of the signature header.

    Returns:
        DeliveryHeaders instance.

    Raises:
        ValidationError: If any of the three headers is missing or empty.
    """
    delivery_id = headers.get(DELIVERY_HEADER)
    event = headers.get(EVENT_HEADER)
    signature = headers.get(signature_header)

    if not (delivery_id and event and signature):
        raise ValidationError("missing headers")

    return DeliveryHeaders(signature=signature, event=event, delivery_id=delivery_id)
