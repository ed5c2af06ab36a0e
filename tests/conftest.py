# Area: Tests
"""Shared fixtures: temp SQLite database, manual clock, engine, draft factory."""

import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest

from draft_engine import DraftEngine, EngineConfig, ManualClock, PlayerSeed
from draft_engine._store.database import init_database
from draft_engine._store.store import DraftStore

T0 = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_path():
    """Create temporary database for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    init_database(path)
    yield path
    os.unlink(path)


@pytest.fixture
def clock():
    return ManualClock(T0)


@pytest.fixture
def store(db_path):
    return DraftStore(db_path)


@pytest.fixture
def engine(db_path, clock):
    return DraftEngine(EngineConfig(db_path=db_path), clock=clock)


def player_seeds(count):
    """Players named so that canonical order is numeric order."""
    return [PlayerSeed(player_name=f"Player {i:02d}", player_team="T1") for i in range(1, count + 1)]


@pytest.fixture
def make_draft(engine):
    """Factory creating a draft scheduled relative to the clock."""

    def _make(
        participants=2,
        round_count=2,
        pick_seconds=60,
        players=20,
        scheduled_in=3600,
    ):
        seats = [(f"u{i}", f"User {i}") for i in range(1, participants + 1)]
        return engine.create_draft(
            name="Test Draft",
            scheduled_at=engine.clock.now() + timedelta(seconds=scheduled_in),
            round_count=round_count,
            pick_seconds=pick_seconds,
            participants=seats,
            players=player_seeds(players),
            created_by_user_id="u1",
        )

    return _make


@pytest.fixture
def live_draft(engine, make_draft):
    """Factory creating a draft and forcing it live at the current instant."""

    def _make(**kwargs):
        draft_id = make_draft(**kwargs)
        result = engine.status_control.set_status(draft_id, "live", force=True)
        assert result.ok
        return draft_id

    return _make


ROLES = ("top", "jng", "mid", "adc", "sup")


@pytest.fixture
def role_draft(engine):
    """Factory creating a live unique_roles draft whose pool cycles through ROLES."""

    def _make(participants=2, round_count=3, pick_seconds=60, players=None):
        seeds = players if players is not None else [
            PlayerSeed(player_name=f"Player {i:02d}", player_role=ROLES[(i - 1) % len(ROLES)])
            for i in range(1, 21)
        ]
        draft_id = engine.create_draft(
            name="Role Draft",
            scheduled_at=engine.clock.now() + timedelta(hours=1),
            round_count=round_count,
            pick_seconds=pick_seconds,
            participants=[(f"u{i}", f"User {i}") for i in range(1, participants + 1)],
            players=seeds,
            unique_roles=True,
        )
        assert engine.status_control.set_status(draft_id, "live", force=True).ok
        return draft_id

    return _make
