"""Unit tests for webhook signature validation."""

import hashlib
import hmac

import pytest

from hubhook.webhook.validators import ValidationError, sign_payload, verify_signature


class TestSignPayload:
    """Tests for signature computation."""

    def test_sha1_signature_format(self) -> None:
        """Test that the default signature is sha1= plus 40 hex characters."""
        payload = b'{"some":"github","object":"with","properties":true}'
        expected = hmac.new(b"myhashsecret", payload, hashlib.sha1).hexdigest()

        signature = sign_payload(payload, "myhashsecret")

        assert signature == f"sha1={expected}"
        assert len(signature) == len("sha1=") + 40

    def test_sha256_signature_format(self) -> None:
        """Test signing with sha256."""
        payload = b'{"action": "opened"}'
        expected = hmac.new(b"secret", payload, hashlib.sha256).hexdigest()

        assert sign_payload(payload, "secret", "sha256") == f"sha256={expected}"


class TestVerifySignature:
    """Tests for signature verification."""

    def test_valid_signature(self) -> None:
        """Test that a valid signature passes verification."""
        secret = "test-secret"
        payload = b'{"action": "opened"}'
        signature = "sha1=" + hmac.new(secret.encode(), payload, hashlib.sha1).hexdigest()

        # Should not raise
        verify_signature(payload, signature, secret)

    def test_flipped_hex_character(self) -> None:
        """Test that changing one hex digit fails verification."""
        payload = b'{"action": "opened"}'
        signature = sign_payload(payload, "test-secret")
        tampered = signature[:-1] + ("0" if signature[-1] != "0" else "1")

        with pytest.raises(ValidationError, match="signature mismatch"):
            verify_signature(payload, tampered, "test-secret")

    def test_missing_prefix(self) -> None:
        """Test that a bare hex digest is rejected."""
        payload = b'{"action": "opened"}'
        signature = hmac.new(b"test-secret", payload, hashlib.sha1).hexdigest()

        with pytest.raises(ValidationError):
            verify_signature(payload, signature, "test-secret")

    def test_wrong_secret(self) -> None:
        """Test that a signature made with another secret is rejected."""
        payload = b'{"action": "opened"}'
        signature = sign_payload(payload, "correct-secret")

        with pytest.raises(ValidationError):
            verify_signature(payload, signature, "wrong-secret")

    def test_reserialised_body_is_rejected(self) -> None:
        """Test that the signature covers the exact bytes, not the parsed value."""
        signed_body = b'{"a": 1, "b": 2}'
        signature = sign_payload(signed_body, "test-secret")

        with pytest.raises(ValidationError):
            verify_signature(b'{"a":1,"b":2}', signature, "test-secret")

    def test_sha256_signature_rejected_in_sha1_mode(self) -> None:
        """Test that the algorithm prefix must match."""
        payload = b"{}"
        signature = sign_payload(payload, "test-secret", "sha256")

        with pytest.raises(ValidationError):
            verify_signature(payload, signature, "test-secret")

    def test_non_ascii_signature(self) -> None:
        """Test that non-ASCII header values are rejected rather than raising TypeError."""
        with pytest.raises(ValidationError):
            verify_signature(b"{}", "sha1=éé", "test-secret")

    def test_decision_is_deterministic(self) -> None:
        """Test that the same inputs always give the same outcome."""
        payload = b'{"zen": "Keep it logically awesome."}'
        good = sign_payload(payload, "test-secret")
        bad = good[:-1] + ("0" if good[-1] != "0" else "1")

        for _ in range(3):
            verify_signature(payload, good, "test-secret")
            with pytest.raises(ValidationError):
                verify_signature(payload, bad, "test-secret")

    def test_unsupported_algorithm(self) -> None:
        """Test that digests GitHub does not use are refused."""
        with pytest.raises(ValueError, match="Unsupported signature algorithm"):
            sign_payload(b"{}", "test-secret", "md5")
