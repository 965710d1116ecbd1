from datetime import datetime
from enum import IntEnum
from typing import Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PresenceType(IntEnum):
    OFFLINE = 0
    ONLINE = 1
    IN_GAME = 2


class BadgeRecord(BaseModel):
    """
    One badge as returned by the badges API. Only `id` takes part in comparison.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str = ""
    description: str | None = None
    created: datetime | None = None
    icon_image_id: int | None = Field(default=None, alias="iconImageId")


class PresenceSnapshot(BaseModel):
    """
    Presence of the tracked user at one poll. `status` keeps unknown codes as-is.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: int = Field(alias="userPresenceType")
    last_location: str = Field(default="Unknown", alias="lastLocation")
    place_id: int | None = Field(default=None, alias="placeId")

    @field_validator("last_location", mode="before")
    @classmethod
    def _blank_location(cls, value: object) -> object:
        return value or "Unknown"


class BadgeAdded(BaseModel):
    kind: Literal["badge_added"] = "badge_added"
    badge: BadgeRecord


class BadgeRemoved(BaseModel):
    kind: Literal["badge_removed"] = "badge_removed"
    badge: BadgeRecord


class StatusChanged(BaseModel):
    """Transition between two consecutive presence snapshots."""
    kind: Literal["status_changed"] = "status_changed"
    from_status: int
    to_status: int
    current: PresenceSnapshot


MonitorEvent = BadgeAdded | BadgeRemoved | StatusChanged


class BadgeDiff(NamedTuple):
    added: list[BadgeRecord]
    removed: list[BadgeRecord]


class MonitorState(BaseModel):
    """
    Last-known state carried from one cycle to the next.
    `presence` is None both before the first poll and after a failed one.
    """
    model_config = ConfigDict(frozen=True)

    badges: list[BadgeRecord] = []
    presence: PresenceSnapshot | None = None
    cycles: int = 0
    last_check_at: datetime | None = None
