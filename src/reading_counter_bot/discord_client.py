from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

DISCORD_API_BASE_URL = "https://discord.com/api/v10"


class DiscordApiError(Exception):
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"discord api error {status_code}: {body[:500]}")


class DiscordApiClient:
    """Minimal Discord REST client authenticated with a bot token."""

    def __init__(
        self,
        *,
        bot_token: str,
        base_url: str = DISCORD_API_BASE_URL,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._bot_token = bot_token
        self._http = http_client

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bot {self._bot_token}"}

    def _put(self, url: str, payload: Any) -> httpx.Response:
        if self._http is not None:
            return self._http.put(url, headers=self._headers(), json=payload)
        with httpx.Client(timeout=10.0) as c:
            return c.put(url, headers=self._headers(), json=payload)

    def bulk_overwrite_commands(
        self,
        *,
        app_id: str,
        commands: List[Dict[str, Any]],
        guild_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Replace the whole command catalog of an application.

        Global when guild_id is None, otherwise scoped to that guild (guild
        commands show up immediately, global ones can take a while).

        Returns: The registered commands as echoed back by Discord
        """
        if guild_id:
            url = f"{self.base_url}/applications/{app_id}/guilds/{guild_id}/commands"
        else:
            url = f"{self.base_url}/applications/{app_id}/commands"
        r = self._put(url, commands)
        if r.status_code >= 400:
            raise DiscordApiError(r.status_code, r.text)
        try:
            data = r.json()
        except ValueError:
            raise DiscordApiError(r.status_code, r.text)
        if isinstance(data, list):
            return list(data)
        return []
