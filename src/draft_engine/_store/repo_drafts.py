# Area: Store
"""
draft_engine._store.repo_drafts — Drafts Repository
===================================================

Repository for the drafts table. Deleting a draft cascades to its
participants, pool, picks, presence and timeout events.
"""

from datetime import datetime
from typing import List, Optional

from ..types import Draft
from .._engine.enums import DraftStatus
from .database import BaseRepository, to_db_time


class DraftRepository(BaseRepository):
    """
    Repository for drafts table.

    Handles creating, retrieving, and updating draft records.
    """

    def create_draft(
        self,
        name: str,
        scheduled_at: datetime,
        round_count: int,
        pick_seconds: int,
        created_at: datetime,
        created_by_user_id: Optional[str] = None,
        status: DraftStatus = DraftStatus.SCHEDULED,
        started_at: Optional[datetime] = None,
        unique_roles: bool = False,
    ) -> int:
        """
        Insert a new draft.

        Returns:
            The new draft id
        """
        query = """
            INSERT INTO drafts
            (name, status, scheduled_at, started_at, round_count,
             pick_seconds, unique_roles, created_by_user_id, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """
        cursor = self._execute(query, (
            name,
            DraftStatus(status).value,
            to_db_time(scheduled_at),
            to_db_time(started_at),
            round_count,
            pick_seconds,
            int(unique_roles),
            created_by_user_id,
            to_db_time(created_at),
        ))
        return int(cursor.lastrowid)

    def get_draft(self, draft_id: int) -> Optional[Draft]:
        """
        Get a draft by ID.

        Args:
            draft_id: Draft identifier to look up

        Returns:
            Draft or None if not found
        """
        row = self._fetch_one("SELECT * FROM drafts WHERE id = ?", (draft_id,))
        return Draft.model_validate(row) if row else None

    def list_active_draft_ids(self) -> List[int]:
        """Ids of drafts automation may need to touch (not completed)."""
        rows = self._fetch_all(
            "SELECT id FROM drafts WHERE status != 'completed' ORDER BY id"
        )
        return [row["id"] for row in rows]

    def update_status(
        self,
        draft_id: int,
        status: DraftStatus,
        started_at: Optional[datetime] = None,
    ) -> None:
        """
        Update a draft's status, stamping started_at if it is still unset.

        Args:
            draft_id: Draft identifier
            status: New status value
            started_at: Start instant to record when none is stored yet
        """
        query = """
            UPDATE drafts
            SET status = ?, started_at = COALESCE(started_at, ?)
            WHERE id = ?
        """
        self._execute(query, (DraftStatus(status).value, to_db_time(started_at), draft_id))

    def mark_completed(self, draft_id: int) -> bool:
        """
        Mark a draft completed.

        Returns:
            True if the status changed, False if it was already completed
        """
        cursor = self._execute(
            "UPDATE drafts SET status = 'completed' WHERE id = ? AND status != 'completed'",
            (draft_id,),
        )
        return cursor.rowcount == 1

    def delete_draft(self, draft_id: int) -> bool:
        """Delete a draft and everything that belongs to it."""
        cursor = self._execute("DELETE FROM drafts WHERE id = ?", (draft_id,))
        return cursor.rowcount == 1
