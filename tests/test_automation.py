# Area: Automation Tests
"""Tests for the automation processor: scheduled starts, timeouts, completion."""

import sqlite3
from datetime import timedelta
from unittest.mock import patch

import pytest

from draft_engine import (
    DraftEngine,
    DraftStatus,
    EngineConfig,
    PickActor,
    PlayerSeed,
    StoreFailure,
    TimeoutOutcome,
)


def read_state(engine, draft_id):
    with engine.store.session("test_read", draft_id, write=False) as s:
        return s.drafts.get_draft(draft_id), s.picks.list_picks(draft_id)


class TestScheduledStart:
    """Tests for drafts going live by schedule."""

    def test_not_due_yet(self, engine, make_draft):
        draft_id = make_draft(scheduled_in=60)
        result = engine.process_due_drafts(draft_id)
        assert result.started_drafts == 0
        assert read_state(engine, draft_id)[0].status == DraftStatus.SCHEDULED

    def test_due_draft_goes_live_without_presence(self, engine, make_draft, clock):
        """Test automated start bypasses the presence gate."""
        draft_id = make_draft(scheduled_in=60)
        clock.advance(60)
        result = engine.process_due_drafts(draft_id)
        draft, picks = read_state(engine, draft_id)
        assert result.started_drafts == 1
        assert draft.status == DraftStatus.LIVE
        assert draft.started_at == clock.now()
        assert picks == []

    def test_late_start_uses_processing_instant(self, engine, make_draft, clock):
        """Test a draft started late does not owe picks for the gap."""
        draft_id = make_draft(scheduled_in=60, pick_seconds=30)
        clock.advance(600)
        result = engine.process_due_drafts(draft_id)
        assert result.started_drafts == 1
        assert result.auto_picks == 0

    def test_single_participant_draft_is_skipped(self, engine, make_draft, clock):
        draft_id = make_draft(participants=1, scheduled_in=0)
        clock.advance(10)
        result = engine.process_due_drafts(draft_id)
        assert result.started_drafts == 0
        assert read_state(engine, draft_id)[0].status == DraftStatus.SCHEDULED


class TestTimeoutCatchUp:
    """Tests for auto-picks on lapsed deadlines."""

    def test_nothing_before_deadline(self, engine, live_draft, clock):
        draft_id = live_draft()
        clock.advance(59)
        assert engine.process_due_drafts(draft_id).auto_picks == 0

    def test_auto_pick_at_exact_deadline(self, engine, live_draft, clock):
        draft_id = live_draft()
        clock.advance(60)
        assert engine.process_due_drafts(draft_id).auto_picks == 1

    def test_catches_up_missed_intervals(self, engine, live_draft, clock):
        """Test three lapsed intervals yield three picks in one pass."""
        start = clock.now()
        draft_id = live_draft(participants=2, round_count=3)
        clock.advance(185)
        result = engine.process_due_drafts(draft_id)
        _, picks = read_state(engine, draft_id)

        assert result.auto_picks == 3
        assert [p.overall_pick for p in picks] == [1, 2, 3]
        assert [p.participant_user_id for p in picks] == ["u1", "u2", "u2"]
        assert [p.player_name for p in picks] == ["Player 01", "Player 02", "Player 03"]
        assert [p.picked_at for p in picks] == [
            start + timedelta(seconds=60),
            start + timedelta(seconds=120),
            start + timedelta(seconds=180),
        ]

    def test_repeat_pass_is_idempotent(self, engine, live_draft, clock):
        draft_id = live_draft()
        clock.advance(125)
        engine.process_due_drafts(draft_id)
        again = engine.process_due_drafts(draft_id)
        _, picks = read_state(engine, draft_id)
        assert again.auto_picks == 0
        assert len(picks) == 2

    def test_auto_pick_attribution(self, engine, live_draft, clock):
        draft_id = live_draft()
        clock.advance(60)
        engine.process_due_drafts(draft_id)
        pick = read_state(engine, draft_id)[1][0]
        assert pick.actor == PickActor.SYSTEM
        assert pick.is_auto_pick is True
        assert pick.picked_by_user_id == "system:auto-pick"
        assert pick.picked_by_label == "Auto Pick (Timeout)"
        assert pick.participant_user_id == "u1"

    def test_custom_system_actor(self, db_path, clock, make_draft):
        engine = DraftEngine(
            EngineConfig(db_path=db_path, system_actor_id="bot", system_actor_label="Bot"),
            clock=clock,
        )
        draft_id = make_draft()
        engine.status_control.set_status(draft_id, "live", force=True)
        clock.advance(60)
        engine.process_due_drafts(draft_id)
        pick = read_state(engine, draft_id)[1][0]
        assert (pick.picked_by_user_id, pick.picked_by_label) == ("bot", "Bot")

    def test_timeout_events_recorded(self, engine, live_draft, clock):
        draft_id = live_draft()
        clock.advance(120)
        engine.process_due_drafts(draft_id)
        events = engine.get_timeout_events(draft_id)
        assert [e.overall_pick for e in events] == [1, 2]
        assert all(e.outcome == TimeoutOutcome.AUTOPICKED for e in events)
        assert events[0].player_name == "Player 01"

    def test_completes_when_picks_exhausted(self, engine, live_draft, clock):
        draft_id = live_draft(participants=2, round_count=2)
        clock.advance(3600)
        result = engine.process_due_drafts(draft_id)
        draft, picks = read_state(engine, draft_id)
        assert result.auto_picks == 4
        assert result.completed_drafts == 1
        assert draft.status == DraftStatus.COMPLETED
        assert len(picks) == 4

    def test_pool_exhausted_records_skip_and_completes(self, engine, live_draft, clock):
        draft_id = live_draft(participants=2, round_count=2, players=1)
        clock.advance(130)
        result = engine.process_due_drafts(draft_id)
        draft, picks = read_state(engine, draft_id)
        events = engine.get_timeout_events(draft_id)

        assert result.auto_picks == 1
        assert result.completed_drafts == 1
        assert draft.status == DraftStatus.COMPLETED
        assert len(picks) == 1
        assert [e.outcome for e in events] == [TimeoutOutcome.AUTOPICKED, TimeoutOutcome.SKIPPED]
        assert events[1].player_name is None

    def test_no_deadline_without_pick_seconds(self, engine, live_draft, clock):
        draft_id = live_draft(pick_seconds=0)
        clock.advance(86400)
        assert engine.process_due_drafts(draft_id).auto_picks == 0

    def test_paused_draft_is_left_alone(self, engine, live_draft, clock):
        draft_id = live_draft()
        assert engine.status_control.set_status(draft_id, "paused").ok
        clock.advance(600)
        assert engine.process_due_drafts(draft_id).auto_picks == 0


class TestProcessAllDrafts:
    """Tests for processing every active draft."""

    def test_processes_every_draft(self, engine, live_draft, make_draft, clock):
        first = live_draft()
        second = live_draft()
        make_draft(scheduled_in=30)
        clock.advance(60)
        result = engine.process_due_drafts()
        assert result.auto_picks == 2
        assert result.started_drafts == 1
        assert result.failed_draft_ids == []
        assert len(read_state(engine, first)[1]) == 1
        assert len(read_state(engine, second)[1]) == 1

    def test_failure_is_isolated_per_draft(self, engine, live_draft, clock, monkeypatch):
        """Test a failing draft does not stop the others."""
        broken = live_draft()
        healthy = live_draft()
        clock.advance(60)
        original = engine.automation._process_draft

        def flaky(draft_id):
            if draft_id == broken:
                raise StoreFailure("process_due_draft", sqlite3.OperationalError("disk I/O error"), draft_id)
            return original(draft_id)

        monkeypatch.setattr(engine.automation, "_process_draft", flaky)
        result = engine.process_due_drafts()

        assert result.failed_draft_ids == [broken]
        assert result.auto_picks == 1
        assert len(read_state(engine, healthy)[1]) == 1
        assert read_state(engine, broken)[1] == []

    def test_unexpected_error_is_isolated_per_draft(self, engine, live_draft, make_draft, clock):
        """Test a draft that cannot be loaded does not stop later drafts."""
        corrupt = make_draft(scheduled_in=0)
        healthy = live_draft()
        with engine.store.session("corrupt_row") as s:
            s.conn.execute(
                "UPDATE drafts SET scheduled_at = '2026-01-01T00:00:00' WHERE id = ?", (corrupt,)
            )
        clock.advance(61)

        result = engine.process_due_drafts()

        assert result.failed_draft_ids == [corrupt]
        assert result.auto_picks == 1
        assert len(read_state(engine, healthy)[1]) == 1

    def test_single_draft_failure_raises(self, engine, live_draft):
        draft_id = live_draft()

        def broken(s, current_id, now):
            s.conn.execute("SELECT * FROM missing_table")

        with patch.object(engine.automation, "catch_up", side_effect=broken):
            with pytest.raises(StoreFailure) as exc_info:
                engine.process_due_drafts(draft_id)
        assert exc_info.value.draft_id == draft_id

    def test_completed_drafts_are_not_listed(self, engine, live_draft, clock):
        draft_id = live_draft()
        engine.status_control.set_status(draft_id, "completed")
        clock.advance(600)
        result = engine.process_due_drafts()
        assert result.auto_picks == 0
        assert read_state(engine, draft_id)[1] == []

    def test_missing_draft_is_noop(self, engine):
        result = engine.process_due_drafts(12345)
        assert result.started_drafts == result.auto_picks == result.completed_drafts == 0


class TestUniqueRoleAutoPick:
    """Tests for auto-picks in drafts created with unique_roles."""

    def test_skips_roles_already_held(self, engine, role_draft, clock):
        draft_id = role_draft(participants=2, round_count=2, players=[
            PlayerSeed(player_name="Alpha", player_role="top"),
            PlayerSeed(player_name="Bravo", player_role="top"),
            PlayerSeed(player_name="Charlie", player_role="mid"),
            PlayerSeed(player_name="Delta", player_role="TOP"),
            PlayerSeed(player_name="Echo", player_role="jng"),
        ])
        clock.advance(240)
        result = engine.process_due_drafts(draft_id)
        draft, picks = read_state(engine, draft_id)

        assert result.auto_picks == 4
        assert [p.player_name for p in picks] == ["Alpha", "Bravo", "Charlie", "Echo"]
        assert [p.participant_user_id for p in picks] == ["u1", "u2", "u2", "u1"]
        assert draft.status == DraftStatus.COMPLETED

    def test_no_eligible_player_skips_and_completes(self, engine, role_draft, clock):
        draft_id = role_draft(participants=2, round_count=2, players=[
            PlayerSeed(player_name="Alpha", player_role="top"),
            PlayerSeed(player_name="Bravo", player_role="top"),
            PlayerSeed(player_name="Charlie", player_role="top"),
        ])
        clock.advance(600)
        result = engine.process_due_drafts(draft_id)
        draft, picks = read_state(engine, draft_id)
        events = engine.get_timeout_events(draft_id)

        assert result.auto_picks == 2
        assert len(picks) == 2
        assert draft.status == DraftStatus.COMPLETED
        assert events[-1].outcome == TimeoutOutcome.SKIPPED
        assert events[-1].overall_pick == 3

    def test_roleless_players_never_auto_picked(self, engine, role_draft, clock):
        draft_id = role_draft(participants=2, round_count=1, players=[
            PlayerSeed(player_name="Alpha"),
            PlayerSeed(player_name="Bravo", player_role="sup"),
            PlayerSeed(player_name="Charlie", player_role="adc"),
        ])
        clock.advance(60)
        engine.process_due_drafts(draft_id)
        assert read_state(engine, draft_id)[1][0].player_name == "Bravo"
