"""
Format monitor events as Discord webhook payloads and one-line summaries.
"""
from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel

from models import BadgeAdded, BadgeRemoved, MonitorEvent, PresenceType, StatusChanged

ASSET_URL = "https://assetdelivery.roblox.com/v1/asset/?id={asset_id}"
GAME_URL = "https://www.roblox.com/games/{place_id}"

GREEN = 0x00FF00
RED = 0xFF0000
BLUE = 0x0099FF
GRAY = 0x808080

STATUS_TEXT = {
    PresenceType.OFFLINE: "🔴 Offline",
    PresenceType.ONLINE: "🟢 Online",
    PresenceType.IN_GAME: "🎮 Playing",
}
STATUS_COLOR = {
    PresenceType.ONLINE: GREEN,
    PresenceType.IN_GAME: BLUE,
}


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool | None = None


class EmbedThumbnail(BaseModel):
    url: str


class Embed(BaseModel):
    title: str
    description: str | None = None
    fields: list[EmbedField] | None = None
    color: int | None = None
    thumbnail: EmbedThumbnail | None = None
    timestamp: str


class WebhookPayload(BaseModel):
    content: str = ""
    embeds: list[Embed]


def status_text(status: int) -> str:
    return STATUS_TEXT.get(status, "❓ Unknown")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _format_awarded(created: datetime | None) -> str:
    if created is None:
        return "Unknown"
    if created.tzinfo is not None:
        created = created.astimezone(timezone.utc)
    return created.strftime("%Y-%m-%d %H:%M:%S UTC")


def _badge_added_embed(event: BadgeAdded) -> Embed:
    badge = event.badge
    thumbnail = None
    if badge.icon_image_id:
        thumbnail = EmbedThumbnail(url=ASSET_URL.format(asset_id=badge.icon_image_id))
    return Embed(
        title="🏆 New Badge Earned!",
        description=badge.name,
        fields=[
            EmbedField(name="Description", value=badge.description or "No description"),
            EmbedField(name="Awarded", value=_format_awarded(badge.created)),
        ],
        color=GREEN,
        thumbnail=thumbnail,
        timestamp=_now(),
    )


def _badge_removed_embed(event: BadgeRemoved) -> Embed:
    return Embed(
        title="❌ Badge Removed",
        description=event.badge.name,
        color=RED,
        timestamp=_now(),
    )


def _status_changed_embed(event: StatusChanged) -> Embed:
    fields = [
        EmbedField(name="Previous", value=status_text(event.from_status), inline=True),
        EmbedField(name="Current", value=status_text(event.to_status), inline=True),
    ]
    if event.to_status == PresenceType.IN_GAME and event.current.place_id:
        fields.append(
            EmbedField(name="Game", value=f"[View Game]({GAME_URL.format(place_id=event.current.place_id)})")
        )
    return Embed(
        title="📊 Status Changed",
        fields=fields,
        color=STATUS_COLOR.get(event.to_status, GRAY),
        timestamp=_now(),
    )


def build_embed(event: MonitorEvent) -> Embed:
    """Turn one event into a Discord embed. The timestamp is delivery time, not event time."""
    if isinstance(event, BadgeAdded):
        return _badge_added_embed(event)
    if isinstance(event, BadgeRemoved):
        return _badge_removed_embed(event)
    if isinstance(event, StatusChanged):
        return _status_changed_embed(event)
    raise TypeError(f"Unsupported event: {type(event).__name__}")


def build_payload(event: MonitorEvent) -> dict:
    """Full webhook body for one event, with unset optional keys left out."""
    payload = WebhookPayload(embeds=[build_embed(event)])
    return payload.model_dump(exclude_none=True)


def format_event(event: MonitorEvent) -> str:
    """One-line summary used in logs, e.g. `Badge added: Welcome (123)`."""
    if isinstance(event, BadgeAdded):
        return f"Badge added: {event.badge.name} ({event.badge.id})"
    if isinstance(event, BadgeRemoved):
        return f"Badge removed: {event.badge.name} ({event.badge.id})"
    return f"Status: {status_text(event.from_status)} -> {status_text(event.to_status)}"


if __name__ == "__main__":
    import json

    from models import BadgeRecord

    e = BadgeAdded(badge=BadgeRecord(id=1, name="Welcome", iconImageId=42))
    print(format_event(e))
    print(json.dumps(build_payload(e), indent=2, ensure_ascii=False))
