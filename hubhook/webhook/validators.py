"""Webhook signature validation."""

import hashlib
import hmac

# Digests GitHub signs deliveries with
DIGESTS = {
    "sha1": hashlib.sha1,
    "sha256": hashlib.sha256,
}


class ValidationError(Exception):
    """Raised when a delivery fails header or signature validation."""

    pass


def sign_payload(payload: bytes, secret: str, algorithm: str = "sha1") -> str:
    """Compute the signature header value GitHub would send for a payload.

    Args:
        payload: The raw request body bytes.
        secret: The shared webhook secret.
        algorithm: Digest name, ``sha1`` or ``sha256``.

    Returns:
        Signature in ``<algorithm>=<hex digest>`` form.

    Raises:
        ValueError: If the algorithm is not one GitHub uses.
    """
    if algorithm not in DIGESTS:
        raise ValueError(f"Unsupported signature algorithm: {algorithm}")

    digest = hmac.new(secret.encode(), payload, DIGESTS[algorithm]).hexdigest()
    return f"{algorithm}={digest}"


def verify_signature(payload: bytes, signature: str, secret: str, algorithm: str = "sha1") -> None:
    """Verify the HMAC signature of a webhook payload.

    The payload must be the exact bytes received; re-serialising parsed JSON
    does not reproduce what the sender signed.

    Args:
        payload: The raw request body bytes.
        signature: The signature header value.
        secret: The shared webhook secret.
        algorithm: Digest name, ``sha1`` or ``sha256``.

    Raises:
        ValidationError: If the signature does not match.
    """
    expected = sign_payload(payload, secret, algorithm)

    # bytes comparison: compare_digest rejects non-ASCII str
    if not hmac.compare_digest(expected.encode(), signature.encode()):
        raise ValidationError("signature mismatch")
