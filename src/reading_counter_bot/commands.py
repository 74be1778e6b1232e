"""
Slash commands served by the bot.

One table drives both sides: the interaction handler dispatches on it and
the registration CLI publishes it to Discord, so a command cannot be
advertised without a handler (or handled without being advertised).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from reading_counter_bot.models import (
    Interaction,
    InteractionResponse,
    message_response,
)

CommandHandler = Callable[[Interaction], InteractionResponse]


@dataclass(frozen=True)
class Command:
    name: str
    description: str
    handler: CommandHandler

    def definition(self) -> dict[str, str]:
        """Payload for Discord's bulk-overwrite endpoint."""
        return {"name": self.name, "description": self.description}


def handle_ping(interaction: Interaction) -> InteractionResponse:
    return message_response("Pong!")


DEFAULT_COMMANDS: tuple[Command, ...] = (
    Command(
        name="ping",
        description="Botの疎通確認をします",
        handler=handle_ping,
    ),
)


def build_command_table(commands: Iterable[Command]) -> Mapping[str, Command]:
    """Index commands by name. Duplicate names are a programming error."""
    table: dict[str, Command] = {}
    for cmd in commands:
        if cmd.name in table:
            raise ValueError(f"duplicate command name: {cmd.name}")
        table[cmd.name] = cmd
    return MappingProxyType(table)


def command_definitions(table: Mapping[str, Command]) -> list[dict[str, str]]:
    return [cmd.definition() for cmd in table.values()]
