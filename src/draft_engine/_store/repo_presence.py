# Area: Store
"""
draft_engine._store.repo_presence — Presence Repository
=======================================================

Repository for draft_presence table. Rows are created on the first
heartbeat and upserted thereafter.
"""

from datetime import datetime
from typing import List, Optional

from ..types import PresenceRecord
from .database import BaseRepository, to_db_time


class PresenceRepository(BaseRepository):
    """Repository for draft_presence table."""

    def upsert_presence(
        self,
        draft_id: int,
        user_id: str,
        now: datetime,
        is_online: bool = True,
        is_ready: Optional[bool] = None,
    ) -> None:
        """
        Record a heartbeat, optionally toggling readiness.

        Args:
            draft_id: Draft identifier
            user_id: Participant user id
            now: Heartbeat instant
            is_online: Whether the participant is connected
            is_ready: New ready flag, or None to keep the stored value
        """
        query = """
            INSERT INTO draft_presence
            (draft_id, user_id, is_online, is_ready, last_seen_at, updated_at)
            VALUES (?, ?, ?, COALESCE(?, 0), ?, ?)
            ON CONFLICT (draft_id, user_id) DO UPDATE SET
                is_online = excluded.is_online,
                is_ready = COALESCE(?, draft_presence.is_ready),
                last_seen_at = excluded.last_seen_at,
                updated_at = excluded.updated_at
        """
        ready = None if is_ready is None else int(is_ready)
        stamp = to_db_time(now)
        self._execute(query, (
            draft_id, user_id, int(is_online), ready, stamp, stamp, ready,
        ))

    def list_presence(self, draft_id: int) -> List[PresenceRecord]:
        """All presence rows of a draft."""
        rows = self._fetch_all(
            "SELECT draft_id, user_id, is_online, is_ready, last_seen_at "
            "FROM draft_presence WHERE draft_id = ?",
            (draft_id,),
        )
        return [PresenceRecord.model_validate(row) for row in rows]
