# Area: Engine
"""
draft_engine._engine.enums — Draft Status and Result Codes
==========================================================

Defines the draft lifecycle states, the result codes returned by
mutating operations, and the actor/outcome tags stored with picks.
"""

from enum import Enum


class DraftStatus(str, Enum):
    """
    Lifecycle states of a draft.

    State transitions:
    SCHEDULED -> LIVE (commissioner start, or automation at scheduled_at)
    SCHEDULED -> COMPLETED
    LIVE -> PAUSED
    LIVE -> COMPLETED (manual, or when the last pick is made)
    PAUSED -> LIVE
    PAUSED -> COMPLETED
    COMPLETED is terminal.
    """
    SCHEDULED = "scheduled"
    LIVE = "live"
    PAUSED = "paused"
    COMPLETED = "completed"


class ResultCode(str, Enum):
    """
    Business-rule failure codes.

    Returned inside ActionResult; callers branch on the code.
    """
    PLAYER_REQUIRED = "PLAYER_REQUIRED"
    DRAFT_NOT_FOUND = "DRAFT_NOT_FOUND"
    NOT_LIVE = "NOT_LIVE"
    INSUFFICIENT_PARTICIPANTS = "INSUFFICIENT_PARTICIPANTS"
    DRAFT_COMPLETE = "DRAFT_COMPLETE"
    NOT_PARTICIPANT = "NOT_PARTICIPANT"
    OUT_OF_TURN = "OUT_OF_TURN"
    PICK_DEADLINE_EXPIRED = "PICK_DEADLINE_EXPIRED"
    PLAYER_UNAVAILABLE = "PLAYER_UNAVAILABLE"
    PLAYER_ROLE_REQUIRED = "PLAYER_ROLE_REQUIRED"
    POSITION_TAKEN = "POSITION_TAKEN"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"


class PickActor(str, Enum):
    """Who committed a pick."""
    PARTICIPANT = "participant"
    SYSTEM = "system"


class TimeoutOutcome(str, Enum):
    """What automation did with a timed-out slot."""
    AUTOPICKED = "autopicked"
    SKIPPED = "skipped"
