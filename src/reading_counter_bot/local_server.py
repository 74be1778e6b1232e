"""Serve the interactions endpoint locally (e.g. behind an ngrok tunnel)."""

from __future__ import annotations

import os


def main() -> None:
    import uvicorn

    from reading_counter_bot.api_server import app

    port = int(os.getenv("PORT", "8080"))
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
