"""
Abstract interface for the remote state the monitor polls.
Each provider fetches the badge snapshot and the presence snapshot of one user.
"""

from abc import ABC, abstractmethod

import aiohttp

from models import BadgeRecord, PresenceSnapshot


class BaseProvider(ABC):
    """
    Base class for all providers.

    Implementations never raise from the fetch methods: a failed fetch is
    reported as an empty badge list or a None presence.
    """

    @abstractmethod
    async def fetch_badges(self, session: "aiohttp.ClientSession") -> list[BadgeRecord]:
        """
        Return the most recent badges, newest first, or [] on any failure.
        """
        pass

    @abstractmethod
    async def fetch_presence(self, session: "aiohttp.ClientSession") -> PresenceSnapshot | None:
        """
        Return the current presence, or None on any failure.
        """
        pass
