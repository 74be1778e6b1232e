"""
Discord interaction handler.

Flow for a single request (terminal on the first match):
1. Verify the Ed25519 signature over the raw body -> 401 on failure
2. Decode the body as an Interaction -> 400 on failure
3. PING -> PONG
4. APPLICATION_COMMAND -> dispatch on the command name
5. Encode the response as JSON -> 500 on failure

The handler is a plain synchronous call so it can be exercised without an
HTTP server; the FastAPI route only reads the body and headers.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Mapping, Optional

from fastapi.responses import Response
from pydantic import ValidationError

from reading_counter_bot.models import (
    Interaction,
    InteractionResponse,
    InteractionResponseType,
    InteractionType,
    message_response,
)
from reading_counter_bot.webhooks.signatures import (
    SignatureVerificationError,
    verify_discord_signature,
)

if TYPE_CHECKING:
    from reading_counter_bot.commands import Command
    from reading_counter_bot.config import Settings


def _log(event: str, **fields: Any) -> None:
    """Structured logging."""
    try:
        payload = {
            "service": "reading_counter_bot",
            "component": "interactions",
            "event": event,
            **fields,
        }
        print(json.dumps(payload, default=str))
    except Exception:
        print(f"{event} {fields}")


class InteractionDecodeError(Exception):
    """Raised when a verified body is not a valid Interaction."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"interaction decode failed: {reason}")


def decode_interaction(raw_body: bytes) -> Interaction:
    try:
        payload = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InteractionDecodeError(f"invalid_json: {e}") from e
    if not isinstance(payload, dict):
        raise InteractionDecodeError("payload_not_object")
    try:
        return Interaction.model_validate(payload)
    except ValidationError as e:
        raise InteractionDecodeError(f"schema_mismatch: {e.error_count()} errors") from e


def encode_response(response: InteractionResponse) -> bytes:
    return json.dumps(response.to_payload(), separators=(",", ":")).encode("utf-8")


class InteractionHandler:
    def __init__(self, *, settings: Settings, commands: Mapping[str, Command]):
        self.settings = settings
        self.commands = commands

    def handle(
        self,
        *,
        raw_body: bytes,
        signature: Optional[str],
        timestamp: Optional[str],
        request_id: str = "",
    ) -> Response:
        try:
            verify_discord_signature(
                public_key=self.settings.public_key,
                timestamp=timestamp,
                signature=signature,
                raw_body=raw_body,
                max_age_seconds=self.settings.max_age_seconds,
            )
        except SignatureVerificationError as e:
            _log(
                "interaction_signature_failed",
                request_id=request_id,
                reason=e.reason,
            )
            # The reason stays in the log; callers only learn that it failed.
            return Response(
                content="invalid request signature",
                status_code=401,
                media_type="text/plain",
            )

        try:
            interaction = decode_interaction(raw_body)
        except InteractionDecodeError as e:
            _log("interaction_decode_failed", request_id=request_id, reason=e.reason)
            return Response(content="bad request", status_code=400, media_type="text/plain")

        if interaction.type == InteractionType.PING:
            _log("interaction_ping", request_id=request_id)
            return self._respond(
                InteractionResponse(type=InteractionResponseType.PONG),
                request_id=request_id,
            )

        if interaction.type == InteractionType.APPLICATION_COMMAND:
            return self._dispatch(interaction, request_id=request_id)

        _log(
            "interaction_unhandled_type",
            request_id=request_id,
            interaction_type=interaction.type,
        )
        return Response(status_code=200)

    def _dispatch(self, interaction: Interaction, *, request_id: str) -> Response:
        name = interaction.command_name
        command = self.commands.get(name)
        if command is None:
            _log(
                "interaction_unknown_command",
                request_id=request_id,
                command=name,
                mode=self.settings.unknown_command_mode,
            )
            if self.settings.unknown_command_mode == "reply":
                return self._respond(
                    message_response(f"Unknown command: {name}", ephemeral=True),
                    request_id=request_id,
                )
            # silent: the command is left unanswered.
            return Response(status_code=200)

        _log(
            "interaction_command",
            request_id=request_id,
            command=name,
            interaction_id=interaction.id,
        )
        return self._respond(command.handler(interaction), request_id=request_id)

    def _respond(self, response: InteractionResponse, *, request_id: str) -> Response:
        try:
            body = encode_response(response)
        except (TypeError, ValueError) as e:
            _log("interaction_encode_failed", request_id=request_id, error=str(e))
            return Response(
                content="internal server error",
                status_code=500,
                media_type="text/plain",
            )
        return Response(content=body, status_code=200, media_type="application/json")
