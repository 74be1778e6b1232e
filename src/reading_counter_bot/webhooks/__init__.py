"""
Webhook handling for the Discord interactions endpoint.

This module provides signature verification and the interaction handler
that dispatches slash commands.
"""

from reading_counter_bot.webhooks.signatures import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    SignatureVerificationError,
    load_public_key,
    verify_discord_signature,
)

__all__ = [
    "SIGNATURE_HEADER",
    "TIMESTAMP_HEADER",
    "load_public_key",
    "verify_discord_signature",
    "SignatureVerificationError",
]
