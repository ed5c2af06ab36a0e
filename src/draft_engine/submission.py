# Area: Submission
"""
draft_engine.submission — Atomic Pick Submission
================================================

Validates and commits a single human pick. All preconditions are read
inside the same write transaction that inserts the pick, so of any
number of concurrent attempts on one slot exactly one succeeds and the
rest fail with a precondition code.

Checks, in order:
    PLAYER_REQUIRED, DRAFT_NOT_FOUND, NOT_LIVE, INSUFFICIENT_PARTICIPANTS,
    DRAFT_COMPLETE, NOT_PARTICIPANT, OUT_OF_TURN, PICK_DEADLINE_EXPIRED,
    PLAYER_UNAVAILABLE, then PLAYER_ROLE_REQUIRED and POSITION_TAKEN for
    drafts created with unique_roles

A PICK_DEADLINE_EXPIRED rejection does not auto-pick; the caller runs
automation to move the draft past the lapsed deadline.
"""

from __future__ import annotations

import logging
from typing import Optional

from ._engine.deadline import is_deadline_expired, resolve_current_pick_deadline
from ._engine.enums import DraftStatus, PickActor, ResultCode
from ._engine.roster import check_role, held_role_set, normalize_role
from ._engine.slots import resolve_next_pick, total_pick_count
from ._shared.clock import Clock
from ._store.store import DraftStore
from .types import ActionResult, Pick

logger = logging.getLogger("draft_engine.submission")


class PickSubmission:
    """Commits human picks against a transactional store."""

    def __init__(self, store: DraftStore, clock: Clock):
        self.store = store
        self.clock = clock

    def submit_pick(
        self,
        draft_id: int,
        user_id: str,
        user_label: Optional[str],
        player_name: Optional[str],
    ) -> ActionResult:
        """
        Submit a pick for the caller's turn.

        Args:
            draft_id: Draft identifier
            user_id: Submitting user
            user_label: Display label recorded as picked_by_label
            player_name: Requested player (exact pool name)

        Returns:
            ActionResult; on failure ``code`` names the violated precondition

        Raises:
            StoreFailure: If the store fails; nothing is committed
        """
        clean_name = (player_name or "").strip()
        if not clean_name:
            return ActionResult.failure(ResultCode.PLAYER_REQUIRED, "playerName is required.")
        label = (user_label or "").strip() or user_id

        now = self.clock.now()
        with self.store.session("submit_pick", draft_id) as s:
            draft = s.drafts.get_draft(draft_id)
            if draft is None:
                return ActionResult.failure(ResultCode.DRAFT_NOT_FOUND, "Draft not found.")

            if draft.status != DraftStatus.LIVE:
                return ActionResult.failure(
                    ResultCode.NOT_LIVE, "Draft is not live. Start the draft first."
                )

            participants = s.participants.list_participants(draft_id)
            if len(participants) < 2:
                return ActionResult.failure(
                    ResultCode.INSUFFICIENT_PARTICIPANTS,
                    "At least two participants are required.",
                )

            picks = s.picks.list_picks(draft_id)
            next_pick = resolve_next_pick(participants, picks, draft.round_count)
            if next_pick is None:
                s.drafts.mark_completed(draft_id)
                return ActionResult.failure(ResultCode.DRAFT_COMPLETE, "Draft is already complete.")

            if not any(p.user_id == user_id for p in participants):
                return ActionResult.failure(
                    ResultCode.NOT_PARTICIPANT, "You are not a participant in this draft."
                )

            if next_pick.participant_user_id != user_id:
                return ActionResult.failure(
                    ResultCode.OUT_OF_TURN,
                    f"It is currently {next_pick.participant_display_name}'s turn to pick.",
                )

            deadline = resolve_current_pick_deadline(
                draft.pick_seconds, draft.status, draft.started_at, picks
            )
            if is_deadline_expired(deadline, now):
                return ActionResult.failure(
                    ResultCode.PICK_DEADLINE_EXPIRED,
                    "Pick deadline has passed. Wait for automation to process the timeout.",
                )

            unavailable = ActionResult.failure(
                ResultCode.PLAYER_UNAVAILABLE,
                "Selected player is unavailable or already drafted.",
            )
            entry = s.pool.get_player(draft_id, clean_name)
            if entry is None:
                return unavailable
            if s.picks.is_player_picked(draft_id, clean_name):
                return unavailable

            if draft.unique_roles:
                held = held_role_set(s.picks.list_participant_roles(draft_id, user_id))
                code = check_role(entry.player_role, held, unique_roles=True)
                if code == ResultCode.PLAYER_ROLE_REQUIRED:
                    return ActionResult.failure(
                        code, "Selected player is missing a position and cannot be drafted."
                    )
                if code == ResultCode.POSITION_TAKEN:
                    return ActionResult.failure(
                        code,
                        f"{next_pick.participant_display_name} already drafted a "
                        f"{normalize_role(entry.player_role)} player.",
                    )

            pick = Pick(
                draft_id=draft_id,
                overall_pick=next_pick.overall_pick,
                round_number=next_pick.round_number,
                round_pick=next_pick.round_pick,
                participant_user_id=next_pick.participant_user_id,
                participant_display_name=next_pick.participant_display_name,
                player_name=clean_name,
                picked_by_user_id=user_id,
                picked_by_label=label,
                actor=PickActor.PARTICIPANT,
                picked_at=now,
            )
            if not s.picks.insert_pick(pick):
                return unavailable

            total = total_pick_count(len(participants), draft.round_count)
            if pick.overall_pick >= total:
                s.drafts.mark_completed(draft_id)
                logger.info("Draft %d completed by final pick", draft_id,
                            extra={"draft_id": draft_id})

        logger.info(
            "Draft %d: %s picked %s at pick %d",
            draft_id, user_id, clean_name, pick.overall_pick,
            extra={"draft_id": draft_id, "overall_pick": pick.overall_pick, "user_id": user_id},
        )
        return ActionResult.success()
