# Area: Store
"""
draft_engine._store.repo_picks — Picks Repository
=================================================

Repository for draft_picks table. Picks are only ever inserted; the
unique constraints on (draft_id, overall_pick) and (draft_id,
player_name) make a losing insert a no-op instead of an error.
"""

from typing import List, Optional

from ..types import Pick
from .database import BaseRepository, to_db_time


class PickRepository(BaseRepository):
    """Repository for draft_picks table."""

    def list_picks(self, draft_id: int) -> List[Pick]:
        """All picks of a draft ordered by overall_pick."""
        rows = self._fetch_all(
            "SELECT * FROM draft_picks WHERE draft_id = ? ORDER BY overall_pick",
            (draft_id,),
        )
        return [Pick.model_validate(row) for row in rows]

    def count_picks(self, draft_id: int) -> int:
        """Number of picks made so far."""
        row = self._fetch_one(
            "SELECT COUNT(*) AS n FROM draft_picks WHERE draft_id = ?", (draft_id,)
        )
        return int(row["n"]) if row else 0

    def is_player_picked(self, draft_id: int, player_name: str) -> bool:
        """Check whether a player has already been drafted."""
        row = self._fetch_one(
            "SELECT 1 AS hit FROM draft_picks WHERE draft_id = ? AND player_name = ?",
            (draft_id, player_name),
        )
        return row is not None

    def list_participant_roles(self, draft_id: int, user_id: str) -> List[Optional[str]]:
        """Pool roles of the players a participant has drafted."""
        rows = self._fetch_all(
            """
            SELECT pool.player_role FROM draft_picks picks
            JOIN draft_player_pool pool
              ON pool.draft_id = picks.draft_id AND pool.player_name = picks.player_name
            WHERE picks.draft_id = ? AND picks.participant_user_id = ?
            """,
            (draft_id, user_id),
        )
        return [row["player_role"] for row in rows]

    def insert_pick(self, pick: Pick) -> bool:
        """
        Insert a pick.

        Returns:
            True if inserted, False if the slot or player was already taken
        """
        query = """
            INSERT INTO draft_picks
            (draft_id, overall_pick, round_number, round_pick,
             participant_user_id, participant_display_name, player_name,
             picked_by_user_id, picked_by_label, actor, picked_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT DO NOTHING
        """
        cursor = self._execute(query, (
            pick.draft_id,
            pick.overall_pick,
            pick.round_number,
            pick.round_pick,
            pick.participant_user_id,
            pick.participant_display_name,
            pick.player_name,
            pick.picked_by_user_id,
            pick.picked_by_label,
            pick.actor.value,
            to_db_time(pick.picked_at),
        ))
        return cursor.rowcount == 1
