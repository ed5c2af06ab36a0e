# Area: Store
"""
draft_engine._store.repo_participants — Participants Repository
===============================================================

Repository for draft_participants table. Positions are 0-based and
unique per draft.
"""

from typing import List, Optional, Sequence, Tuple

from ..types import Participant
from .database import BaseRepository


class ParticipantRepository(BaseRepository):
    """Repository for draft_participants table."""

    def add_participants(
        self, draft_id: int, participants: Sequence[Tuple[str, str]]
    ) -> None:
        """
        Seat participants in the given order.

        Args:
            draft_id: Draft identifier
            participants: (user_id, display_name) pairs; list order is
                draft order
        """
        query = """
            INSERT INTO draft_participants
            (draft_id, user_id, display_name, draft_position)
            VALUES (?, ?, ?, ?)
        """
        for position, (user_id, display_name) in enumerate(participants):
            self._execute(query, (draft_id, user_id, display_name, position))

    def list_participants(self, draft_id: int) -> List[Participant]:
        """Participants of a draft ordered by draft_position."""
        rows = self._fetch_all(
            "SELECT * FROM draft_participants WHERE draft_id = ? ORDER BY draft_position",
            (draft_id,),
        )
        return [Participant.model_validate(row) for row in rows]

    def get_participant(self, draft_id: int, user_id: str) -> Optional[Participant]:
        """Get one participant, or None if the user is not seated."""
        row = self._fetch_one(
            "SELECT * FROM draft_participants WHERE draft_id = ? AND user_id = ?",
            (draft_id, user_id),
        )
        return Participant.model_validate(row) if row else None
