from __future__ import annotations

import json
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Iterable, Optional

from fastapi import FastAPI

from reading_counter_bot.commands import DEFAULT_COMMANDS, Command, build_command_table
from reading_counter_bot.config import Settings, load_settings
from reading_counter_bot.webhooks.interactions import InteractionHandler
from reading_counter_bot.webhooks.router import router as interactions_router


def _new_request_id() -> str:
    return uuid.uuid4().hex


def _log(event: str, **fields: Any) -> None:
    try:
        payload = {
            "service": "reading_counter_bot",
            "component": "api",
            "event": event,
            **fields,
        }
        print(json.dumps(payload, default=str))
    except Exception:
        print(f"{event} {fields}")


class RequestIdMiddleware:
    """
    Tag each request with an id and log interaction deliveries.

    The id comes from X-Request-ID (or is generated), is exposed as
    request.state.request_id and echoed on the response. Health probes are
    not logged.
    """

    def __init__(self, app, *, quiet_paths: tuple[str, ...] = ("/health",)):
        self.app = app
        self.quiet_paths = quiet_paths

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        rid = (headers.get(b"x-request-id") or b"").decode("utf-8") or _new_request_id()
        signed = bool(headers.get(b"x-signature-ed25519"))

        scope["state"] = scope.get("state", {})
        scope["state"]["request_id"] = rid

        path = scope.get("path", "")
        start = time.monotonic()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
                message = {
                    **message,
                    "headers": [
                        *message.get("headers", []),
                        (b"x-request-id", rid.encode("utf-8")),
                    ],
                }
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            _log(
                "interaction_request_failed",
                request_id=rid,
                path=path,
                error=str(e),
            )
            raise

        if path in self.quiet_paths:
            return
        _log(
            "interaction_request",
            request_id=rid,
            method=scope.get("method", ""),
            path=path,
            signed=signed,
            status_code=status_code,
            duration_ms=int((time.monotonic() - start) * 1000),
        )


def create_app(
    settings: Optional[Settings] = None,
    commands: Optional[Iterable[Command]] = None,
) -> FastAPI:
    """
    Build the interactions app.

    Without explicit settings, configuration is read from the environment
    during startup; a missing or malformed DISCORD_APP_PUBLIC_KEY aborts it.
    """
    command_table = build_command_table(
        DEFAULT_COMMANDS if commands is None else commands
    )

    def _install(app_: FastAPI, s: Settings) -> None:
        app_.state.settings = s
        app_.state.interactions = InteractionHandler(settings=s, commands=command_table)

    @asynccontextmanager
    async def lifespan(app_: FastAPI):
        if getattr(app_.state, "interactions", None) is None:
            s = load_settings()
            _install(app_, s)
            _log(
                "settings_loaded",
                unknown_command_mode=s.unknown_command_mode,
                max_age_seconds=s.max_age_seconds,
                commands=sorted(command_table),
            )
        yield

    app = FastAPI(title="Reading Counter Bot", version="0.1.0", lifespan=lifespan)
    app.state.interactions = None
    if settings is not None:
        _install(app, settings)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Registered last: the interactions route matches POST on any path.
    app.include_router(interactions_router)
    app.add_middleware(RequestIdMiddleware)

    return app


app = create_app()
