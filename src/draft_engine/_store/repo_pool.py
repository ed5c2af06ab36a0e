# Area: Store
"""
draft_engine._store.repo_pool — Player Pool Repository
======================================================

Repository for draft_player_pool table. The canonical pool order, used
for auto-pick selection, is by player_name.
"""

from typing import Iterable, List, Optional

from ..types import PlayerPoolEntry, PlayerSeed
from .database import BaseRepository

_AVAILABLE = """
    SELECT pool.* FROM draft_player_pool pool
    WHERE pool.draft_id = ?
      AND NOT EXISTS (
          SELECT 1 FROM draft_picks picks
          WHERE picks.draft_id = pool.draft_id
            AND picks.player_name = pool.player_name
      )
    ORDER BY pool.player_name
"""


class PlayerPoolRepository(BaseRepository):
    """Repository for draft_player_pool table."""

    def add_players(self, draft_id: int, entries: Iterable[PlayerSeed]) -> None:
        """Add players to a draft's pool."""
        query = """
            INSERT INTO draft_player_pool
            (draft_id, player_name, player_team, player_role)
            VALUES (?, ?, ?, ?)
        """
        for entry in entries:
            self._execute(query, (
                draft_id, entry.player_name, entry.player_team, entry.player_role,
            ))

    def get_player(self, draft_id: int, player_name: str) -> Optional[PlayerPoolEntry]:
        """Look up a pool entry by exact name."""
        row = self._fetch_one(
            "SELECT * FROM draft_player_pool WHERE draft_id = ? AND player_name = ?",
            (draft_id, player_name),
        )
        return PlayerPoolEntry.model_validate(row) if row else None

    def list_available(self, draft_id: int) -> List[PlayerPoolEntry]:
        """Players not yet picked, in canonical order."""
        return [PlayerPoolEntry.model_validate(row) for row in self._fetch_all(_AVAILABLE, (draft_id,))]

    def first_available(self, draft_id: int) -> Optional[PlayerPoolEntry]:
        """First unpicked player in canonical order, or None if exhausted."""
        row = self._fetch_one(_AVAILABLE + " LIMIT 1", (draft_id,))
        return PlayerPoolEntry.model_validate(row) if row else None
