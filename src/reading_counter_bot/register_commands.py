"""
Publish the bot's slash commands to Discord.

Usage:
    register-commands [--guild-id GUILD]

Reads DISCORD_BOT_TOKEN, DISCORD_APP_ID and (optionally) DISCORD_GUILD_ID.
This is a one-off administrative step, independent of the webhook server.
"""

from __future__ import annotations

import argparse
import json
from typing import Any, Optional

from reading_counter_bot.commands import (
    DEFAULT_COMMANDS,
    build_command_table,
    command_definitions,
)
from reading_counter_bot.config import load_registration_settings
from reading_counter_bot.discord_client import DiscordApiClient, DiscordApiError


def _log(event: str, **fields: Any) -> None:
    """Structured logging."""
    try:
        payload = {
            "service": "reading_counter_bot",
            "component": "register_commands",
            "event": event,
            **fields,
        }
        print(json.dumps(payload, default=str))
    except Exception:
        print(f"{event} {fields}")


def main(
    argv: Optional[list[str]] = None,
    *,
    client: Optional[DiscordApiClient] = None,
) -> None:
    parser = argparse.ArgumentParser(
        description="Bulk-overwrite the Discord slash command catalog."
    )
    parser.add_argument("--bot-token", default=None, help="Overrides DISCORD_BOT_TOKEN")
    parser.add_argument("--app-id", default=None, help="Overrides DISCORD_APP_ID")
    parser.add_argument(
        "--guild-id",
        default=None,
        help="Register to a single guild instead of globally (overrides DISCORD_GUILD_ID)",
    )
    args = parser.parse_args(argv)

    try:
        s = load_registration_settings(
            bot_token=args.bot_token, app_id=args.app_id, guild_id=args.guild_id
        )
    except RuntimeError as e:
        raise SystemExit(str(e))

    if client is None:
        client = DiscordApiClient(bot_token=s.bot_token)

    definitions = command_definitions(build_command_table(DEFAULT_COMMANDS))
    print("Registering commands...")
    try:
        registered = client.bulk_overwrite_commands(
            app_id=s.app_id, commands=definitions, guild_id=s.guild_id
        )
    except DiscordApiError as e:
        _log("commands_registration_failed", status_code=e.status_code, body=e.body)
        raise SystemExit(f"Could not register commands: {e}")

    _log(
        "commands_registered",
        app_id=s.app_id,
        guild_id=s.guild_id,
        names=[c.get("name") for c in registered],
    )
    print(f"Successfully registered {len(registered)} commands.")


if __name__ == "__main__":
    main()
