# Area: Engine
"""
draft_engine._engine.state_machine — Draft Status State Machine
===============================================================

Validates draft status changes. The only side effect is stamping
``started_at`` the first time a draft goes live. Entering LIVE from
SCHEDULED or PAUSED requires the presence gate unless forced.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..errors import InvalidStatusTransitionError
from ..types import Participant, ParticipantPresence
from .enums import DraftStatus
from .presence import can_go_live

logger = logging.getLogger("draft_engine.state_machine")


# Valid status transitions: {current_status: {allowed target statuses}}
TRANSITIONS = {
    DraftStatus.SCHEDULED: {DraftStatus.LIVE, DraftStatus.COMPLETED},
    DraftStatus.LIVE: {DraftStatus.PAUSED, DraftStatus.COMPLETED},
    DraftStatus.PAUSED: {DraftStatus.LIVE, DraftStatus.COMPLETED},
    DraftStatus.COMPLETED: set(),
}


class DraftStateMachine:
    """
    Legality checker for one draft's status changes.

    Attributes:
        status: The current status
        started_at: When the draft first went live, if it has
    """

    def __init__(
        self,
        status: DraftStatus,
        started_at: Optional[datetime] = None,
    ):
        self.status = DraftStatus(status)
        self.started_at = started_at

    def can_transition(self, target: DraftStatus) -> bool:
        """
        Check whether moving to ``target`` is legal, ignoring presence.

        Same-state transitions are always legal.
        """
        target = DraftStatus(target)
        if target == self.status:
            return True
        return target in TRANSITIONS.get(self.status, set())

    def transition(
        self,
        target: DraftStatus,
        now: datetime,
        participants: Sequence[Participant] = (),
        presence: Sequence[ParticipantPresence] = (),
        force: bool = False,
    ) -> DraftStatus:
        """
        Execute a status change.

        Args:
            target: Desired status
            now: Current instant, used to stamp started_at
            participants: Draft participants, for the presence gate
            presence: Presence view, for the presence gate
            force: Bypass the presence gate (privileged callers, automation)

        Returns:
            The new status

        Raises:
            InvalidStatusTransitionError: If the change is illegal or the
                presence gate refuses a start
        """
        target = DraftStatus(target)
        if target == self.status:
            return self.status

        if not self.can_transition(target):
            raise InvalidStatusTransitionError(
                self.status, target,
                f"Invalid status transition from {self.status.value} to {target.value}.",
            )

        if target == DraftStatus.LIVE:
            if not can_go_live(participants, presence, force=force):
                present = sum(1 for entry in presence if entry.is_online)
                ready = sum(1 for entry in presence if entry.is_ready)
                total = len(participants)
                raise InvalidStatusTransitionError(
                    self.status, target,
                    "Cannot start draft until all participants are present and ready. "
                    f"Present {present}/{total}, Ready {ready}/{total}.",
                )
            if force:
                logger.debug("Presence gate bypassed for %s -> live", self.status.value)
            if self.started_at is None:
                self.started_at = now

        self.status = target
        return target
