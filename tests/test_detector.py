"""Tests for the snapshot differ: badge set difference and presence transitions."""

from __future__ import annotations

from conftest import make_badge, make_presence
from models import PresenceType, StatusChanged
from pipeline.detector import diff_badges, diff_presence


def _ids(badges):
    return [b.id for b in badges]


class TestDiffBadges:
    def test_unchanged_snapshot_reports_nothing(self) -> None:
        snapshot = [make_badge(3), make_badge(2), make_badge(1)]
        diff = diff_badges(snapshot, snapshot)
        assert diff.added == []
        assert diff.removed == []

    def test_empty_previous_reports_all_current_as_added(self) -> None:
        current = [make_badge(2), make_badge(1)]
        diff = diff_badges([], current)
        assert diff.added == current
        assert diff.removed == []

    def test_empty_current_reports_all_previous_as_removed(self) -> None:
        previous = [make_badge(2), make_badge(1)]
        diff = diff_badges(previous, [])
        assert diff.added == []
        assert diff.removed == previous

    def test_added_and_removed_keep_source_order(self) -> None:
        previous = [make_badge(5), make_badge(4), make_badge(3), make_badge(2)]
        current = [make_badge(9), make_badge(7), make_badge(5), make_badge(3), make_badge(8)]
        diff = diff_badges(previous, current)
        assert _ids(diff.added) == [9, 7, 8]
        assert _ids(diff.removed) == [4, 2]

    def test_added_removed_and_common_are_disjoint(self) -> None:
        previous = [make_badge(i) for i in (1, 2, 3, 4)]
        current = [make_badge(i) for i in (3, 4, 5, 6)]
        diff = diff_badges(previous, current)
        added, removed = set(_ids(diff.added)), set(_ids(diff.removed))
        common = {1, 2, 3, 4} & {3, 4, 5, 6}
        assert added == {5, 6}
        assert removed == {1, 2}
        assert not added & removed
        assert not added & common
        assert not removed & common

    def test_changed_fields_on_same_id_are_ignored(self) -> None:
        previous = [make_badge(1, name="Old", description="before")]
        current = [make_badge(1, name="New", description="after")]
        diff = diff_badges(previous, current)
        assert diff.added == []
        assert diff.removed == []

    def test_source_order_does_not_matter(self) -> None:
        previous = [make_badge(1), make_badge(2), make_badge(3)]
        current = [make_badge(3), make_badge(1), make_badge(2)]
        assert diff_badges(previous, current) == ([], [])


class TestDiffPresence:
    def test_no_baseline_reports_nothing(self) -> None:
        assert diff_presence(None, make_presence(PresenceType.ONLINE)) is None
        assert diff_presence(None, None) is None

    def test_failed_fetch_reports_nothing(self) -> None:
        assert diff_presence(make_presence(PresenceType.ONLINE), None) is None

    def test_same_status_reports_nothing(self) -> None:
        for status in PresenceType:
            assert diff_presence(make_presence(status), make_presence(status)) is None

    def test_offline_to_in_game(self) -> None:
        current = make_presence(PresenceType.IN_GAME, place_id=42)
        transition = diff_presence(make_presence(PresenceType.OFFLINE), current)
        assert transition == StatusChanged(from_status=0, to_status=2, current=current)

    def test_place_change_without_status_change_is_ignored(self) -> None:
        previous = make_presence(PresenceType.IN_GAME, place_id=1, location="Game A")
        current = make_presence(PresenceType.IN_GAME, place_id=2, location="Game B")
        assert diff_presence(previous, current) is None

    def test_unknown_status_code_still_transitions(self) -> None:
        transition = diff_presence(make_presence(PresenceType.ONLINE), make_presence(3))
        assert transition is not None
        assert transition.from_status == 1
        assert transition.to_status == 3
