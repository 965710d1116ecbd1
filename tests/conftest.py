"""Shared fixtures and fakes.

HTTP is replaced by FakeSession, which hands out scripted responses in call
order, so no test touches the network.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

import aiohttp
import pytest

from models import BadgeRecord, MonitorEvent, PresenceSnapshot

# ---------------------------------------------------------------------------
# Fake aiohttp
# ---------------------------------------------------------------------------


class FakeResponse:
    """Async context manager standing in for aiohttp's response."""

    def __init__(
        self,
        payload: Any = None,
        status: int = 200,
        error: BaseException | None = None,
        body: str | bytes = "",
    ) -> None:
        self.payload = payload
        self.status = status
        self.error = error
        self.body = body

    async def __aenter__(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        return self

    async def __aexit__(self, *exc: object) -> bool:
        return False

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=MagicMock(), history=(), status=self.status, message="error"
            )

    async def json(self) -> Any:
        if isinstance(self.payload, BaseException):
            raise self.payload
        return self.payload

    async def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        # aiohttp decodes strictly unless told otherwise
        raw = self.body.encode() if isinstance(self.body, str) else self.body
        return raw.decode(encoding, errors=errors)


class FakeSession:
    """Records requests; each get/post pops the next scripted response."""

    def __init__(
        self,
        get: list[FakeResponse] | None = None,
        post: list[FakeResponse] | None = None,
    ) -> None:
        self._get = list(get or [])
        self._post = list(post or [])
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(("GET", url, kwargs))
        return self._get.pop(0)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(("POST", url, kwargs))
        return self._post.pop(0)


# ---------------------------------------------------------------------------
# Fake provider and notifier
# ---------------------------------------------------------------------------


class ScriptedProvider:
    """Returns the next scripted badge list / presence on each fetch."""

    def __init__(
        self,
        badges: list[list[BadgeRecord]],
        presences: list[PresenceSnapshot | None],
    ) -> None:
        self._badges = list(badges)
        self._presences = list(presences)
        self.calls: list[str] = []

    async def fetch_badges(self, session: Any) -> list[BadgeRecord]:
        self.calls.append("badges")
        return self._badges.pop(0)

    async def fetch_presence(self, session: Any) -> PresenceSnapshot | None:
        self.calls.append("presence")
        return self._presences.pop(0)


class RecordingNotifier:
    """Collects events instead of posting them."""

    def __init__(self) -> None:
        self.sent: list[MonitorEvent] = []
        self.configured = True

    async def notify(self, session: Any, event: MonitorEvent) -> bool:
        self.sent.append(event)
        return True


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

_AWARDED = datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)


def make_badge(badge_id: int, name: str | None = None, **kwargs: Any) -> BadgeRecord:
    """Create a BadgeRecord with sensible defaults for testing."""
    return BadgeRecord(
        id=badge_id,
        name=name or f"Badge {badge_id}",
        created=kwargs.pop("created", _AWARDED),
        **kwargs,
    )


def make_presence(status: int, place_id: int | None = None, location: str = "Website") -> PresenceSnapshot:
    return PresenceSnapshot(status=status, place_id=place_id, last_location=location)


@pytest.fixture
def recording_notifier() -> RecordingNotifier:
    return RecordingNotifier()
