"""
Poll loop: fetch both snapshots, diff against the last-known state, notify.

State is passed into and returned from each cycle. The loop only arms the
next cycle after the current one has finished, so cycles never overlap.
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import aiohttp

from logging_setup import get_logger
from models import BadgeAdded, BadgeRecord, BadgeRemoved, MonitorEvent, MonitorState, PresenceSnapshot
from pipeline.detector import diff_badges, diff_presence
from pipeline.notifier import WebhookNotifier
from providers.base import BaseProvider

_log = get_logger("monitor")


def advance_badges(
    state: MonitorState,
    badges: list[BadgeRecord],
) -> tuple[MonitorState, list[MonitorEvent]]:
    """Diff fetched badges against the baseline and replace it with them.

    An empty baseline (first cycle or failed previous fetch) reports nothing.
    """
    events: list[MonitorEvent] = []
    if state.badges:
        diff = diff_badges(state.badges, badges)
        events.extend(BadgeAdded(badge=b) for b in diff.added)
        events.extend(BadgeRemoved(badge=b) for b in diff.removed)
    return state.model_copy(update={"badges": badges}), events


def advance_presence(
    state: MonitorState,
    presence: PresenceSnapshot | None,
) -> tuple[MonitorState, list[MonitorEvent]]:
    """Diff fetched presence against the baseline and replace it, even with None.

    A failed fetch therefore clears the baseline and hides the next transition.
    """
    transition = diff_presence(state.presence, presence)
    events: list[MonitorEvent] = [transition] if transition else []
    return state.model_copy(update={"presence": presence}), events


async def run_cycle(
    state: MonitorState,
    session: aiohttp.ClientSession,
    provider: BaseProvider,
    notifier: WebhookNotifier,
) -> tuple[MonitorState, list[MonitorEvent]]:
    """One fetch-diff-notify pass. Badge notifications go out before the presence one."""
    badges = await provider.fetch_badges(session)
    state, badge_events = advance_badges(state, badges)
    for event in badge_events:
        await notifier.notify(session, event)

    presence = await provider.fetch_presence(session)
    state, presence_events = advance_presence(state, presence)
    for event in presence_events:
        await notifier.notify(session, event)

    state = state.model_copy(
        update={"cycles": state.cycles + 1, "last_check_at": datetime.now(timezone.utc)}
    )
    return state, badge_events + presence_events


class Monitor:
    """Owns the last-known state and drives run_cycle on a fixed period."""

    def __init__(
        self,
        provider: BaseProvider,
        notifier: WebhookNotifier,
        interval: float,
        user_id: int | None = None,
    ) -> None:
        self.provider = provider
        self.notifier = notifier
        self.interval = interval
        self.user_id = user_id
        self.state = MonitorState()

    async def tick(self, session: aiohttp.ClientSession) -> list[MonitorEvent]:
        """Run one cycle and keep its resulting state."""
        _log.info("cycle_started", user_id=self.user_id, cycle=self.state.cycles + 1)
        self.state, events = await run_cycle(self.state, session, self.provider, self.notifier)
        _log.info(
            "cycle_finished",
            user_id=self.user_id,
            cycle=self.state.cycles,
            badges=len(self.state.badges),
            presence=self.state.presence.status if self.state.presence else None,
            events=len(events),
        )
        return events

    async def run_forever(self, max_cycles: int | None = None) -> None:
        """Run a cycle now, then one per interval, until cancelled (or max_cycles ran).

        The next cycle is armed only after the current one returns. A cycle that
        overruns the interval is followed by the next one straight away.
        """
        loop = asyncio.get_running_loop()
        ran = 0
        async with aiohttp.ClientSession() as session:
            while True:
                started = loop.time()
                try:
                    await self.tick(session)
                except Exception:
                    _log.exception("cycle_failed", user_id=self.user_id)
                ran += 1
                if max_cycles is not None and ran >= max_cycles:
                    return
                delay = max(0.0, self.interval - (loop.time() - started))
                await asyncio.sleep(delay)
