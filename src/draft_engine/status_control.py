# Area: Status
"""
draft_engine.status_control — Status Changes and Presence Updates
=================================================================

Applies commissioner status changes through the DraftStateMachine and
records participant heartbeats and readiness. Authorising the caller
(commissioner or participant identity) is the API layer's job; ``force``
is honoured as given.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ._engine.enums import DraftStatus, ResultCode
from ._engine.presence import DEFAULT_HEARTBEAT_WINDOW_SECONDS, build_participant_presence
from ._engine.state_machine import DraftStateMachine
from ._shared.clock import Clock
from ._store.store import DraftStore
from .errors import InvalidStatusTransitionError
from .types import ActionResult

logger = logging.getLogger("draft_engine.status_control")


class StatusControl:
    """
    Status transitions and presence updates for drafts.

    Attributes:
        store: Transactional draft store
        clock: Source of the current instant
        heartbeat_window_seconds: Maximum heartbeat age to count as online
    """

    def __init__(
        self,
        store: DraftStore,
        clock: Clock,
        heartbeat_window_seconds: int = DEFAULT_HEARTBEAT_WINDOW_SECONDS,
    ):
        self.store = store
        self.clock = clock
        self.heartbeat_window_seconds = heartbeat_window_seconds

    def set_status(
        self,
        draft_id: int,
        target_status: Union[DraftStatus, str],
        force: bool = False,
    ) -> ActionResult:
        """
        Move a draft to ``target_status``.

        Args:
            draft_id: Draft identifier
            target_status: Desired status
            force: Bypass the presence gate when going live

        Returns:
            ActionResult; INVALID_STATUS_TRANSITION for illegal changes or a
            refused presence gate
        """
        try:
            target = DraftStatus(target_status)
        except ValueError:
            return ActionResult.failure(
                ResultCode.INVALID_STATUS_TRANSITION, f"Invalid status: {target_status!r}."
            )

        now = self.clock.now()
        with self.store.session("set_status", draft_id) as s:
            draft = s.drafts.get_draft(draft_id)
            if draft is None:
                return ActionResult.failure(ResultCode.DRAFT_NOT_FOUND, "Draft not found.")

            participants = s.participants.list_participants(draft_id)
            presence = build_participant_presence(
                participants,
                s.presence.list_presence(draft_id),
                now,
                self.heartbeat_window_seconds,
            )

            machine = DraftStateMachine(draft.status, draft.started_at)
            try:
                machine.transition(target, now, participants, presence, force=force)
            except InvalidStatusTransitionError as e:
                logger.info("Draft %d: status change refused: %s", draft_id, e,
                            extra={"draft_id": draft_id})
                return ActionResult.failure(ResultCode.INVALID_STATUS_TRANSITION, str(e))

            if machine.status != draft.status:
                s.drafts.update_status(draft_id, machine.status, machine.started_at)
                logger.info(
                    "Draft %d: %s -> %s%s",
                    draft_id, draft.status.value, machine.status.value,
                    " (forced)" if force else "",
                    extra={"draft_id": draft_id},
                )

        return ActionResult.success()

    def update_presence(
        self,
        draft_id: int,
        user_id: str,
        ready: Optional[bool] = None,
        online: bool = True,
    ) -> ActionResult:
        """
        Record a heartbeat for a participant, optionally setting readiness.

        Args:
            draft_id: Draft identifier
            user_id: Participant user id
            ready: New ready flag, or None to leave it unchanged
            online: False when the participant is leaving the room

        Returns:
            ActionResult; NOT_PARTICIPANT if the user is not seated
        """
        now = self.clock.now()
        with self.store.session("update_presence", draft_id) as s:
            if s.drafts.get_draft(draft_id) is None:
                return ActionResult.failure(ResultCode.DRAFT_NOT_FOUND, "Draft not found.")
            if s.participants.get_participant(draft_id, user_id) is None:
                return ActionResult.failure(
                    ResultCode.NOT_PARTICIPANT, "Only draft participants can update presence."
                )
            s.presence.upsert_presence(draft_id, user_id, now, is_online=online, is_ready=ready)

        logger.debug("Draft %d: presence %s online=%s ready=%s",
                     draft_id, user_id, online, ready, extra={"draft_id": draft_id})
        return ActionResult.success()
