"""
Snapshot differ: compares two consecutive polls and decides what is reportable.
Pure functions, no I/O.
"""
from models import BadgeDiff, BadgeRecord, PresenceSnapshot, StatusChanged


def diff_badges(previous: list[BadgeRecord], current: list[BadgeRecord]) -> BadgeDiff:
    """Return badges added (in current's order) and removed (in previous's order), keyed by id.

    Other fields are not compared: an edited description on a known id is not a change.
    """
    previous_ids = {b.id for b in previous}
    current_ids = {b.id for b in current}
    added = [b for b in current if b.id not in previous_ids]
    removed = [b for b in previous if b.id not in current_ids]
    return BadgeDiff(added=added, removed=removed)


def diff_presence(
    previous: PresenceSnapshot | None,
    current: PresenceSnapshot | None,
) -> StatusChanged | None:
    """Return the status transition between two polls, or None.

    None when there is no baseline, the current poll failed, or the status code
    is unchanged. Location and place are ignored, so hopping between two games
    is not reported.
    """
    if previous is None or current is None:
        return None
    if previous.status == current.status:
        return None
    return StatusChanged(from_status=previous.status, to_status=current.status, current=current)
