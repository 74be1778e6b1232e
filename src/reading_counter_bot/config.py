from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from reading_counter_bot.webhooks.signatures import load_public_key

UNKNOWN_COMMAND_MODES = ("silent", "reply")


@dataclass(frozen=True)
class Settings:
    public_key: Ed25519PublicKey
    # "silent": leave unknown commands unanswered (empty 200).
    # "reply": answer with an ephemeral "unknown command" message.
    unknown_command_mode: str = "silent"
    max_age_seconds: Optional[int] = None  # None disables the replay window


@dataclass(frozen=True)
class RegistrationSettings:
    bot_token: str
    app_id: str
    guild_id: Optional[str] = None


def load_settings() -> Settings:
    public_key_hex = (os.getenv("DISCORD_APP_PUBLIC_KEY") or "").strip()
    if not public_key_hex:
        raise RuntimeError("DISCORD_APP_PUBLIC_KEY must be set")

    try:
        public_key = load_public_key(public_key_hex)
    except ValueError as e:
        raise RuntimeError(f"Failed to decode DISCORD_APP_PUBLIC_KEY: {e}") from e

    unknown_command_mode = (
        (os.getenv("UNKNOWN_COMMAND_MODE") or "silent").strip().lower()
    )
    if unknown_command_mode not in UNKNOWN_COMMAND_MODES:
        raise RuntimeError(
            f"UNKNOWN_COMMAND_MODE must be one of {', '.join(UNKNOWN_COMMAND_MODES)}"
        )

    # Optional: reject requests whose timestamp is older than this many seconds
    raw_max_age = (os.getenv("INTERACTIONS_MAX_AGE_SECONDS") or "").strip()
    max_age_seconds: Optional[int] = None
    if raw_max_age:
        try:
            max_age_seconds = int(raw_max_age)
        except ValueError:
            raise RuntimeError("INTERACTIONS_MAX_AGE_SECONDS must be an integer")
        if max_age_seconds <= 0:
            max_age_seconds = None

    return Settings(
        public_key=public_key,
        unknown_command_mode=unknown_command_mode,
        max_age_seconds=max_age_seconds,
    )


def load_registration_settings(
    *,
    bot_token: Optional[str] = None,
    app_id: Optional[str] = None,
    guild_id: Optional[str] = None,
) -> RegistrationSettings:
    """Explicit arguments win over DISCORD_BOT_TOKEN / DISCORD_APP_ID / DISCORD_GUILD_ID."""
    bot_token = (bot_token or os.getenv("DISCORD_BOT_TOKEN") or "").strip()
    app_id = (app_id or os.getenv("DISCORD_APP_ID") or "").strip()
    guild_id = (guild_id or os.getenv("DISCORD_GUILD_ID") or "").strip() or None

    if not bot_token or not app_id:
        raise RuntimeError("DISCORD_BOT_TOKEN and DISCORD_APP_ID must be set")

    return RegistrationSettings(bot_token=bot_token, app_id=app_id, guild_id=guild_id)
