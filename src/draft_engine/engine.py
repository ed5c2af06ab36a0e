# Area: Engine
"""
draft_engine.engine — Draft Engine Facade
=========================================

Entry points for the API layer and the periodic timer. Every mutating
call first runs automation for the draft so it acts on caught-up state,
then performs its own action. A pick rejected for an expired deadline
triggers one more automation pass, which makes draft state converge no
matter which client or timer touched it last.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ._engine.deadline import resolve_current_pick_deadline
from ._engine.enums import DraftStatus, ResultCode
from ._engine.presence import build_participant_presence
from ._engine.slots import resolve_next_pick
from ._shared.clock import Clock, SystemClock
from ._store.store import DraftStore
from .automation import AutomationProcessor
from .config import EngineConfig
from .status_control import StatusControl
from .submission import PickSubmission
from .types import (
    ActionResult,
    DraftProcessingResult,
    DraftSnapshot,
    PlayerSeed,
    TimeoutEvent,
)

logger = logging.getLogger("draft_engine.engine")


class DraftEngine:
    """
    Draft turn engine over a transactional store.

    Quick start:
        engine = DraftEngine(EngineConfig(db_path="drafts.db"))
        engine.initialize()
        draft_id = engine.create_draft("Spring", scheduled_at, 3, 60,
                                       [("u1", "Ann"), ("u2", "Bo")], players)
        engine.set_status(draft_id, "live", force=True)
        engine.submit_pick(draft_id, "u1", "Ann", "Faker")
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        clock: Optional[Clock] = None,
        store: Optional[DraftStore] = None,
    ):
        self.config = config or EngineConfig()
        self.clock = clock or SystemClock()
        self.store = store or DraftStore(
            self.config.db_path, busy_timeout=self.config.busy_timeout_seconds
        )
        self.automation = AutomationProcessor(
            self.store,
            self.clock,
            system_actor_id=self.config.system_actor_id,
            system_actor_label=self.config.system_actor_label,
        )
        self.submission = PickSubmission(self.store, self.clock)
        self.status_control = StatusControl(
            self.store, self.clock, self.config.heartbeat_window_seconds
        )

    def initialize(self) -> None:
        """Create the database schema if needed."""
        self.store.initialize()

    # ── Draft setup ─────────────────────────────────────────────

    def create_draft(
        self,
        name: str,
        scheduled_at: datetime,
        round_count: int,
        pick_seconds: int,
        participants: Sequence[Tuple[str, str]],
        players: Iterable[PlayerSeed],
        created_by_user_id: Optional[str] = None,
        unique_roles: bool = False,
    ) -> int:
        """
        Create a draft with participants (in draft order) and its pool.

        Raises:
            InvalidArgumentError: If scheduled_at is not timezone-aware
        """
        return self.store.create_draft(
            name=name,
            scheduled_at=scheduled_at,
            round_count=round_count,
            pick_seconds=pick_seconds,
            participants=participants,
            players=players,
            created_at=self.clock.now(),
            created_by_user_id=created_by_user_id,
            unique_roles=unique_roles,
        )

    def delete_draft(self, draft_id: int) -> bool:
        """Delete a draft with its picks, presence and timeout events."""
        return self.store.delete_draft(draft_id)

    # ── Operations ──────────────────────────────────────────────

    def process_due_drafts(self, draft_id: Optional[int] = None) -> DraftProcessingResult:
        """Run automation for one draft or all drafts."""
        return self.automation.process_due_drafts(draft_id)

    def submit_pick(
        self,
        draft_id: int,
        user_id: str,
        user_label: Optional[str],
        player_name: Optional[str],
    ) -> ActionResult:
        """Catch the draft up, then submit a human pick."""
        self.automation.process_due_drafts(draft_id)
        result = self.submission.submit_pick(draft_id, user_id, user_label, player_name)
        if not result.ok:
            logger.info("Draft %d: pick by %s rejected: %s",
                        draft_id, user_id, result.code.value if result.code else None,
                        extra={"draft_id": draft_id, "user_id": user_id})
            if result.code == ResultCode.PICK_DEADLINE_EXPIRED:
                self.automation.process_due_drafts(draft_id)
        return result

    def set_status(
        self,
        draft_id: int,
        target_status: Union[DraftStatus, str],
        force: bool = False,
    ) -> ActionResult:
        """Catch the draft up, then apply a status change."""
        self.automation.process_due_drafts(draft_id)
        return self.status_control.set_status(draft_id, target_status, force=force)

    def update_presence(
        self,
        draft_id: int,
        user_id: str,
        ready: Optional[bool] = None,
        online: bool = True,
    ) -> ActionResult:
        """Record a heartbeat; a readiness change also runs automation."""
        result = self.status_control.update_presence(draft_id, user_id, ready=ready, online=online)
        if result.ok and ready is not None:
            self.automation.process_due_drafts(draft_id)
        return result

    # ── Reads ───────────────────────────────────────────────────

    def get_draft_snapshot(self, draft_id: int) -> Optional[DraftSnapshot]:
        """
        Catch the draft up and return its full state.

        Returns:
            DraftSnapshot, or None if the draft does not exist
        """
        self.automation.process_due_drafts(draft_id)
        now = self.clock.now()
        with self.store.session("get_draft_snapshot", draft_id, write=False) as s:
            draft = s.drafts.get_draft(draft_id)
            if draft is None:
                return None
            participants = s.participants.list_participants(draft_id)
            picks = s.picks.list_picks(draft_id)
            available = s.pool.list_available(draft_id)
            presence_rows = s.presence.list_presence(draft_id)

        presence = build_participant_presence(
            participants, presence_rows, now, self.config.heartbeat_window_seconds
        )
        next_pick = None
        if draft.status != DraftStatus.COMPLETED and len(participants) >= 2:
            next_pick = resolve_next_pick(participants, picks, draft.round_count)

        return DraftSnapshot(
            draft=draft,
            participants=participants,
            picks=picks,
            available_players=available,
            next_pick=next_pick,
            current_pick_deadline_at=resolve_current_pick_deadline(
                draft.pick_seconds, draft.status, draft.started_at, picks
            ),
            participant_presence=presence,
            present_participant_count=sum(1 for p in presence if p.is_online),
            ready_participant_count=sum(1 for p in presence if p.is_ready),
            server_now=now,
        )

    def get_timeout_events(self, draft_id: int) -> List[TimeoutEvent]:
        """Timeout ledger of a draft."""
        with self.store.session("get_timeout_events", draft_id, write=False) as s:
            return s.timeouts.list_events(draft_id)
