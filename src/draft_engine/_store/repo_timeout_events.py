# Area: Store
"""
draft_engine._store.repo_timeout_events — Timeout Events Repository
===================================================================

Repository for draft_timeout_events table: one row per slot whose
deadline lapsed and was resolved by automation.
"""

from typing import List

from ..types import TimeoutEvent
from .database import BaseRepository, to_db_time


class TimeoutEventRepository(BaseRepository):
    """Repository for draft_timeout_events table."""

    def record_event(self, event: TimeoutEvent) -> None:
        """Record a timeout outcome. A second event for the same slot is ignored."""
        query = """
            INSERT INTO draft_timeout_events
            (draft_id, overall_pick, round_number, round_pick,
             participant_user_id, outcome, player_name, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (draft_id, overall_pick) DO NOTHING
        """
        self._execute(query, (
            event.draft_id,
            event.overall_pick,
            event.round_number,
            event.round_pick,
            event.participant_user_id,
            event.outcome.value,
            event.player_name,
            to_db_time(event.created_at),
        ))

    def list_events(self, draft_id: int) -> List[TimeoutEvent]:
        """Timeout events of a draft ordered by overall_pick."""
        rows = self._fetch_all(
            "SELECT * FROM draft_timeout_events WHERE draft_id = ? ORDER BY overall_pick",
            (draft_id,),
        )
        return [TimeoutEvent.model_validate(row) for row in rows]
