"""
Wire models for Discord interactions.

Only the fields this bot reads or writes are declared; everything else in
the inbound payload is ignored.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictInt, model_validator


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    MODAL = 9


class MessageFlags(IntEnum):
    EPHEMERAL = 1 << 6


class InteractionData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Slash commands carry a name; components and modals carry a custom_id.
    name: Optional[str] = None
    custom_id: Optional[str] = None
    id: Optional[str] = None
    type: Optional[int] = None
    options: Optional[list[dict[str, Any]]] = None


class Interaction(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Strict so "1", true or 1.0 are rejected; any integer still decodes.
    type: StrictInt
    id: Optional[str] = None
    application_id: Optional[str] = None
    token: Optional[str] = None
    guild_id: Optional[str] = None
    channel_id: Optional[str] = None
    data: Optional[InteractionData] = None

    @model_validator(mode="after")
    def _command_requires_data(self) -> "Interaction":
        if self.type == InteractionType.APPLICATION_COMMAND and (
            self.data is None or not self.data.name
        ):
            raise ValueError("application command interaction must include data.name")
        return self

    @property
    def command_name(self) -> str:
        if self.data is None:
            return ""
        return self.data.name or ""


class InteractionResponseData(BaseModel):
    content: Optional[str] = None
    flags: Optional[int] = None


class InteractionResponse(BaseModel):
    type: InteractionResponseType
    data: Optional[InteractionResponseData] = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def message_response(content: str, *, ephemeral: bool = False) -> InteractionResponse:
    return InteractionResponse(
        type=InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
        data=InteractionResponseData(
            content=content,
            flags=int(MessageFlags.EPHEMERAL) if ephemeral else None,
        ),
    )
