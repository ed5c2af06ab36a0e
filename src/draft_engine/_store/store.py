# Area: Store
"""
draft_engine._store.store — Transactional Draft Store
=====================================================

Bundles the repositories over one transaction. Every engine operation
opens exactly one session; whatever it reads and writes inside the
session commits or rolls back together.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from ..errors import InvalidArgumentError
from ..types import PlayerSeed
from .database import DEFAULT_BUSY_TIMEOUT_SECONDS, init_database, transaction
from .repo_drafts import DraftRepository
from .repo_participants import ParticipantRepository
from .repo_picks import PickRepository
from .repo_pool import PlayerPoolRepository
from .repo_presence import PresenceRepository
from .repo_timeout_events import TimeoutEventRepository


class StoreSession:
    """Repositories sharing the connection of one open transaction."""

    def __init__(self, conn):
        self.conn = conn
        self.drafts = DraftRepository(conn)
        self.participants = ParticipantRepository(conn)
        self.pool = PlayerPoolRepository(conn)
        self.picks = PickRepository(conn)
        self.presence = PresenceRepository(conn)
        self.timeouts = TimeoutEventRepository(conn)


class DraftStore:
    """
    SQLite-backed store for drafts.

    Attributes:
        db_path: Path to the SQLite database file
        busy_timeout: Seconds a writer waits for the write lock
    """

    def __init__(
        self,
        db_path: str = "draft_engine.db",
        busy_timeout: float = DEFAULT_BUSY_TIMEOUT_SECONDS,
    ):
        self.db_path = db_path
        self.busy_timeout = busy_timeout

    def initialize(self) -> None:
        """Create the schema if it does not exist."""
        init_database(self.db_path)

    @contextmanager
    def session(
        self,
        operation: str,
        draft_id: Optional[int] = None,
        write: bool = True,
    ) -> Iterator[StoreSession]:
        """
        Open a transaction and yield its repositories.

        Raises:
            StoreFailure: If the store fails; the transaction is rolled back
        """
        with transaction(
            self.db_path,
            operation,
            draft_id=draft_id,
            busy_timeout=self.busy_timeout,
            write=write,
        ) as conn:
            yield StoreSession(conn)

    def create_draft(
        self,
        name: str,
        scheduled_at: datetime,
        round_count: int,
        pick_seconds: int,
        participants: Sequence[Tuple[str, str]],
        players: Iterable[PlayerSeed],
        created_at: datetime,
        created_by_user_id: Optional[str] = None,
        unique_roles: bool = False,
    ) -> int:
        """
        Create a draft together with its participants and player pool.

        Args:
            scheduled_at: Timezone-aware start time
            participants: (user_id, display_name) pairs in draft order
            players: Players forming the pool
            created_at: Timezone-aware creation time
            unique_roles: Enforce one player per role per participant

        Returns:
            The new draft id

        Raises:
            InvalidArgumentError: If a timestamp is naive
        """
        for argument, value in (("scheduled_at", scheduled_at), ("created_at", created_at)):
            if value.tzinfo is None or value.utcoffset() is None:
                raise InvalidArgumentError(argument, value, "must be timezone-aware")

        with self.session("create_draft") as s:
            draft_id = s.drafts.create_draft(
                name=name,
                scheduled_at=scheduled_at,
                round_count=round_count,
                pick_seconds=pick_seconds,
                created_at=created_at,
                created_by_user_id=created_by_user_id,
                unique_roles=unique_roles,
            )
            s.participants.add_participants(draft_id, participants)
            s.pool.add_players(draft_id, players)
        return draft_id

    def delete_draft(self, draft_id: int) -> bool:
        """Delete a draft; picks, presence and timeout events cascade."""
        with self.session("delete_draft", draft_id) as s:
            return s.drafts.delete_draft(draft_id)
