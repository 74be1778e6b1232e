"""
Webhook signature verification for Discord interactions.

Discord signs every interaction request with the application's Ed25519 key:
- Signed message: {X-Signature-Timestamp}{raw_body}
- Signature header (X-Signature-Ed25519): hex-encoded 64-byte signature

The signature covers the exact bytes on the wire, so verification must run
against the raw request body and never against a re-serialized payload.
"""

from __future__ import annotations

import time
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"

_PUBLIC_KEY_SIZE = 32
_SIGNATURE_SIZE = 64


class SignatureVerificationError(Exception):
    """Raised when webhook signature verification fails."""

    def __init__(self, reason: str, service: str):
        self.reason = reason
        self.service = service
        super().__init__(f"{service} signature verification failed: {reason}")


def load_public_key(public_key_hex: str) -> Ed25519PublicKey:
    """
    Decode the application public key shown in the Discord developer portal.

    Raises:
        ValueError: If the value is not hex or not a 32-byte Ed25519 key
    """
    raw = bytes.fromhex(public_key_hex.strip())
    if len(raw) != _PUBLIC_KEY_SIZE:
        raise ValueError(
            f"expected {_PUBLIC_KEY_SIZE}-byte public key, got {len(raw)} bytes"
        )
    return Ed25519PublicKey.from_public_bytes(raw)


def verify_discord_signature(
    *,
    public_key: Ed25519PublicKey,
    timestamp: Optional[str],
    signature: Optional[str],
    raw_body: bytes,
    max_age_seconds: Optional[int] = None,
) -> None:
    """
    Verify a Discord interaction request signature.

    Args:
        public_key: Trusted application public key
        timestamp: X-Signature-Timestamp header
        signature: X-Signature-Ed25519 header
        raw_body: Raw request body bytes, exactly as received
        max_age_seconds: Reject older timestamps (None disables the check)

    Raises:
        SignatureVerificationError: If verification fails
    """
    if not timestamp:
        raise SignatureVerificationError("missing_timestamp_header", "discord")
    if not signature:
        raise SignatureVerificationError("missing_signature_header", "discord")

    try:
        sig_bytes = bytes.fromhex(signature)
    except ValueError:
        raise SignatureVerificationError("invalid_signature_format", "discord")
    if len(sig_bytes) != _SIGNATURE_SIZE:
        raise SignatureVerificationError("invalid_signature_length", "discord")

    # Replay protection (opt-in; Discord does not require it)
    if max_age_seconds is not None:
        try:
            ts = int(timestamp)
        except (ValueError, TypeError):
            raise SignatureVerificationError("invalid_timestamp", "discord")
        age = abs(time.time() - ts)
        if age > max_age_seconds:
            raise SignatureVerificationError(
                f"stale_timestamp (age={int(age)}s, max={max_age_seconds}s)",
                "discord",
            )

    try:
        public_key.verify(sig_bytes, timestamp.encode("utf-8") + raw_body)
    except InvalidSignature:
        raise SignatureVerificationError("bad_signature", "discord")
