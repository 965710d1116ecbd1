"""
Roblox adapter: reads a user's recent badges and presence and normalizes them.
"""

import asyncio
from typing import Any

import aiohttp
from pydantic import BaseModel

from logging_setup import get_logger
from models import BadgeRecord, PresenceSnapshot
from providers.base import BaseProvider

BADGES_URL = "https://badges.roblox.com/v1/users/{user_id}/badges"
PRESENCE_URL = "https://presence.roblox.com/v1/presence/users"

# Anything that can go wrong between sending the request and holding a parsed model.
# pydantic.ValidationError and json.JSONDecodeError are both ValueErrors.
FETCH_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError, KeyError, IndexError, TypeError)

_log = get_logger("providers.roblox")


class BadgePage(BaseModel):
    """Parsed response from the user badges endpoint."""
    data: list[BadgeRecord] | None = None


class PresenceResponse(BaseModel):
    """Parsed response from the presence endpoint."""
    userPresences: list[PresenceSnapshot]


class RobloxProvider(BaseProvider):
    """Fetch badges and presence for one Roblox user."""

    def __init__(self, user_id: int, badge_limit: int = 10) -> None:
        self.user_id = user_id
        self.badge_limit = badge_limit

    async def fetch_badge_page(self, session: aiohttp.ClientSession) -> BadgePage:
        """GET the most recent badges, newest first. Raises on HTTP or parse errors."""
        url = BADGES_URL.format(user_id=self.user_id)
        params = {"limit": str(self.badge_limit), "sortOrder": "Desc"}
        async with session.get(url, params=params) as resp:
            resp.raise_for_status()
            data: Any = await resp.json()
        return BadgePage.model_validate(data or {})

    async def fetch_presence_response(self, session: aiohttp.ClientSession) -> PresenceResponse:
        """POST the tracked user id to the presence endpoint. Raises on HTTP or parse errors."""
        async with session.post(PRESENCE_URL, json={"userIds": [self.user_id]}) as resp:
            resp.raise_for_status()
            data: Any = await resp.json()
        return PresenceResponse.model_validate(data)

    async def fetch_badges(self, session: aiohttp.ClientSession) -> list[BadgeRecord]:
        try:
            page = await self.fetch_badge_page(session)
        except FETCH_ERRORS as exc:
            _log.warning("badges_fetch_failed", user_id=self.user_id, error=str(exc) or type(exc).__name__)
            return []
        return page.data or []

    async def fetch_presence(self, session: aiohttp.ClientSession) -> PresenceSnapshot | None:
        try:
            response = await self.fetch_presence_response(session)
            return response.userPresences[0]
        except FETCH_ERRORS as exc:
            _log.warning("presence_fetch_failed", user_id=self.user_id, error=str(exc) or type(exc).__name__)
            return None


if __name__ == "__main__":
    from config import load_config

    async def main() -> None:
        cfg = load_config()
        provider = RobloxProvider(cfg.user_id, cfg.badge_limit)
        async with aiohttp.ClientSession() as session:
            badges = await provider.fetch_badges(session)
            presence = await provider.fetch_presence(session)
        for b in badges:
            print(b.model_dump_json())
        print(presence.model_dump_json() if presence else "presence unavailable")

    asyncio.run(main())
