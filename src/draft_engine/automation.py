# Area: Automation
"""
draft_engine.automation — Draft Automation Processor
=====================================================

Brings persisted draft state in line with wall-clock time without any
human action:

1. Scheduled drafts whose ``scheduled_at`` has arrived go live. The
   presence gate is bypassed for automated starts.
2. While a live draft's current deadline has passed, the participant on
   the clock is auto-picked the first available player (canonical pool
   order, skipping roles the participant holds in unique_roles drafts)
   on behalf of the system actor. Each auto-pick is stamped at
   the deadline it resolved, so a draft left alone for N intervals
   catches up with N picks in one pass.
3. A draft whose picks are exhausted is completed, as is a draft whose
   participant on the clock has no eligible player left.

Each draft is processed in its own transaction. A store failure rolls
back everything done for that draft; when processing all drafts, any
failure is confined to the draft that raised it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from ._engine.deadline import is_deadline_expired, resolve_current_pick_deadline
from ._engine.enums import DraftStatus, PickActor, TimeoutOutcome
from ._engine.roster import held_role_set, select_auto_pick
from ._engine.slots import resolve_next_pick, total_pick_count
from ._engine.state_machine import DraftStateMachine
from ._shared.clock import Clock
from ._shared.logging_config import log_store_failure
from ._store.store import DraftStore, StoreSession
from .errors import StoreFailure
from .types import DraftProcessingResult, Pick, TimeoutEvent

logger = logging.getLogger("draft_engine.automation")


class AutomationProcessor:
    """
    Starts due drafts and resolves lapsed pick deadlines.

    Attributes:
        store: Transactional draft store
        clock: Source of the current instant
        system_actor_id: picked_by_user_id recorded on auto-picks
        system_actor_label: picked_by_label recorded on auto-picks
    """

    def __init__(
        self,
        store: DraftStore,
        clock: Clock,
        system_actor_id: str = "system:auto-pick",
        system_actor_label: str = "Auto Pick (Timeout)",
    ):
        self.store = store
        self.clock = clock
        self.system_actor_id = system_actor_id
        self.system_actor_label = system_actor_label

    def process_due_drafts(self, draft_id: Optional[int] = None) -> DraftProcessingResult:
        """
        Process one draft, or every draft that is not completed.

        Args:
            draft_id: Draft to process; None processes all drafts

        Returns:
            Counters of started drafts, auto-picks and completed drafts

        Raises:
            StoreFailure: When processing a single draft fails. When
                processing all drafts, failures are logged, listed in
                ``failed_draft_ids`` and the remaining drafts still run.
        """
        if draft_id is not None:
            return self._process_draft(draft_id)

        with self.store.session("list_active_drafts", write=False) as s:
            draft_ids: List[int] = s.drafts.list_active_draft_ids()

        result = DraftProcessingResult()
        for current_id in draft_ids:
            try:
                result.merge(self._process_draft(current_id))
            except StoreFailure as e:
                log_store_failure(e)
                result.failed_draft_ids.append(current_id)
            except Exception:
                logger.exception("Draft %d: automation failed", current_id,
                                 extra={"draft_id": current_id})
                result.failed_draft_ids.append(current_id)

        if result.started_drafts or result.auto_picks or result.completed_drafts:
            logger.info(
                "Automation pass: started=%d auto_picks=%d completed=%d",
                result.started_drafts, result.auto_picks, result.completed_drafts,
            )
        return result

    def _process_draft(self, draft_id: int) -> DraftProcessingResult:
        now = self.clock.now()
        with self.store.session("process_due_draft", draft_id) as s:
            return self.catch_up(s, draft_id, now)

    def catch_up(
        self, s: StoreSession, draft_id: int, now: datetime
    ) -> DraftProcessingResult:
        """
        Catch a single draft up to ``now`` inside an open session.

        Args:
            s: Open store session (write transaction)
            draft_id: Draft to process
            now: Instant to catch up to

        Returns:
            Counters for this draft
        """
        result = DraftProcessingResult()
        draft = s.drafts.get_draft(draft_id)
        if draft is None:
            return result

        participants = s.participants.list_participants(draft_id)
        if len(participants) < 2:
            logger.debug("Skipping draft %d: fewer than 2 participants", draft_id)
            return result

        status = draft.status
        started_at = draft.started_at

        if status == DraftStatus.SCHEDULED and draft.scheduled_at <= now:
            machine = DraftStateMachine(status, started_at)
            status = machine.transition(DraftStatus.LIVE, now, force=True)
            started_at = machine.started_at
            s.drafts.update_status(draft_id, status, started_at)
            result.started_drafts += 1
            logger.info("Draft %d started by schedule", draft_id, extra={"draft_id": draft_id})

        if status != DraftStatus.LIVE:
            return result

        total = total_pick_count(len(participants), draft.round_count)
        picks = s.picks.list_picks(draft_id)

        while True:
            if len(picks) >= total:
                if s.drafts.mark_completed(draft_id):
                    result.completed_drafts += 1
                    logger.info("Draft %d completed", draft_id, extra={"draft_id": draft_id})
                break

            deadline = resolve_current_pick_deadline(
                draft.pick_seconds, status, started_at, picks
            )
            if deadline is None or not is_deadline_expired(deadline, now):
                break

            next_pick = resolve_next_pick(participants, picks, draft.round_count)
            if draft.unique_roles:
                held = held_role_set(
                    s.picks.list_participant_roles(draft_id, next_pick.participant_user_id)
                )
                player = select_auto_pick(s.pool.list_available(draft_id), held, unique_roles=True)
            else:
                player = s.pool.first_available(draft_id)
            if player is None:
                s.timeouts.record_event(TimeoutEvent(
                    draft_id=draft_id,
                    overall_pick=next_pick.overall_pick,
                    round_number=next_pick.round_number,
                    round_pick=next_pick.round_pick,
                    participant_user_id=next_pick.participant_user_id,
                    outcome=TimeoutOutcome.SKIPPED,
                    created_at=deadline,
                ))
                logger.warning(
                    "Draft %d: no eligible player left at pick %d, completing",
                    draft_id, next_pick.overall_pick,
                    extra={"draft_id": draft_id, "overall_pick": next_pick.overall_pick},
                )
                if s.drafts.mark_completed(draft_id):
                    result.completed_drafts += 1
                break

            pick = Pick(
                draft_id=draft_id,
                overall_pick=next_pick.overall_pick,
                round_number=next_pick.round_number,
                round_pick=next_pick.round_pick,
                participant_user_id=next_pick.participant_user_id,
                participant_display_name=next_pick.participant_display_name,
                player_name=player.player_name,
                picked_by_user_id=self.system_actor_id,
                picked_by_label=self.system_actor_label,
                actor=PickActor.SYSTEM,
                picked_at=deadline,
            )
            if not s.picks.insert_pick(pick):
                logger.warning(
                    "Draft %d: slot %d already filled, stopping catch-up",
                    draft_id, pick.overall_pick,
                )
                break

            s.timeouts.record_event(TimeoutEvent(
                draft_id=draft_id,
                overall_pick=pick.overall_pick,
                round_number=pick.round_number,
                round_pick=pick.round_pick,
                participant_user_id=pick.participant_user_id,
                outcome=TimeoutOutcome.AUTOPICKED,
                player_name=pick.player_name,
                created_at=deadline,
            ))
            picks.append(pick)
            result.auto_picks += 1
            logger.info(
                "Draft %d: auto-picked %s for %s at pick %d",
                draft_id, pick.player_name, pick.participant_user_id, pick.overall_pick,
                extra={"draft_id": draft_id, "overall_pick": pick.overall_pick},
            )

        return result
