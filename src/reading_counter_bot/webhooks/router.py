"""
Webhook router for the Discord interactions endpoint.

Discord is configured with a single Interactions Endpoint URL, so the
route accepts POST on any path; signature verification and dispatch live
in interactions.py.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Optional

from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.responses import Response

from reading_counter_bot.webhooks.signatures import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
)

if TYPE_CHECKING:
    from reading_counter_bot.webhooks.interactions import InteractionHandler


def _log(event: str, **fields: Any) -> None:
    """Structured logging."""
    try:
        payload = {
            "service": "reading_counter_bot",
            "component": "router",
            "event": event,
            **fields,
        }
        print(json.dumps(payload, default=str))
    except Exception:
        print(f"{event} {fields}")


router = APIRouter(tags=["interactions"])


@router.post("/{path:path}")
async def discord_interactions(
    request: Request,
    path: str,
    x_signature_ed25519: str = Header(default="", alias=SIGNATURE_HEADER),
    x_signature_timestamp: str = Header(default="", alias=TIMESTAMP_HEADER),
) -> Response:
    """
    Handle Discord interaction webhooks.

    The body is read once as raw bytes and handed to the handler unchanged,
    because the signature is computed over those bytes.
    """
    handler: Optional[InteractionHandler] = getattr(
        request.app.state, "interactions", None
    )
    if handler is None:
        _log("interaction_handler_not_initialized")
        raise HTTPException(status_code=503, detail="interaction handler not initialized")

    raw_body = await request.body()
    request_id = getattr(request.state, "request_id", "")

    return handler.handle(
        raw_body=raw_body,
        signature=x_signature_ed25519 or None,
        timestamp=x_signature_timestamp or None,
        request_id=request_id,
    )
