# Area: Engine Tests
"""Tests for the presence view and the go-live gate."""

from datetime import datetime, timedelta, timezone

from draft_engine import (
    Participant,
    PresenceRecord,
    build_participant_presence,
    can_go_live,
)

T0 = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def seats(count):
    return [
        Participant(draft_id=1, user_id=f"u{i}", display_name=f"User {i}", draft_position=i)
        for i in range(count)
    ]


def heartbeat(user_id, seconds_ago, online=True, ready=True):
    return PresenceRecord(
        draft_id=1,
        user_id=user_id,
        is_online=online,
        is_ready=ready,
        last_seen_at=T0 - timedelta(seconds=seconds_ago),
    )


class TestBuildParticipantPresence:
    """Tests for build_participant_presence."""

    def test_fresh_heartbeat_is_online(self):
        view = build_participant_presence(seats(1), [heartbeat("u0", 10)], T0)
        assert view[0].is_online is True
        assert view[0].is_ready is True

    def test_heartbeat_at_window_edge_is_online(self):
        view = build_participant_presence(seats(1), [heartbeat("u0", 45)], T0, 45)
        assert view[0].is_online is True

    def test_stale_heartbeat_is_offline(self):
        """Test an online flag older than the window does not count."""
        view = build_participant_presence(seats(1), [heartbeat("u0", 46)], T0, 45)
        assert view[0].is_online is False
        assert view[0].is_ready is True

    def test_stored_offline_flag_wins(self):
        view = build_participant_presence(seats(1), [heartbeat("u0", 1, online=False)], T0)
        assert view[0].is_online is False

    def test_missing_row_is_offline_and_not_ready(self):
        view = build_participant_presence(seats(2), [heartbeat("u0", 1)], T0)
        assert [p.user_id for p in view] == ["u0", "u1"]
        assert view[1].is_online is False
        assert view[1].is_ready is False
        assert view[1].last_seen_at is None

    def test_custom_window(self):
        view = build_participant_presence(seats(1), [heartbeat("u0", 100)], T0, 120)
        assert view[0].is_online is True


class TestCanGoLive:
    """Tests for can_go_live."""

    def test_all_online_and_ready(self):
        participants = seats(2)
        presence = build_participant_presence(
            participants, [heartbeat("u0", 1), heartbeat("u1", 2)], T0
        )
        assert can_go_live(participants, presence) is True

    def test_one_not_ready_blocks(self):
        participants = seats(2)
        presence = build_participant_presence(
            participants, [heartbeat("u0", 1), heartbeat("u1", 2, ready=False)], T0
        )
        assert can_go_live(participants, presence) is False

    def test_one_absent_blocks(self):
        participants = seats(3)
        presence = build_participant_presence(
            participants, [heartbeat("u0", 1), heartbeat("u1", 1)], T0
        )
        assert can_go_live(participants, presence) is False

    def test_force_bypasses_gate(self):
        participants = seats(2)
        presence = build_participant_presence(participants, [], T0)
        assert can_go_live(participants, presence, force=True) is True
