"""
draft_engine.types — Domain models
==================================

Pydantic models for the records the engine reads and writes, and for
the values its operations return. All are exported from the package:

    from draft_engine import Draft, Pick, ActionResult, ...

Timestamps are timezone-aware UTC datetimes. Store rows are turned
into models with ``Model.model_validate(row)``.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from ._engine.enums import (
    DraftStatus,
    PickActor,
    ResultCode,
    TimeoutOutcome,
)


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=False)


# ============================================
# Stored records
# ============================================

class Draft(_Record):
    """A single turn-based draft.

    Fields
    ------
    round_count : int
        Number of rounds; every participant picks once per round.
    pick_seconds : int
        Seconds allowed per pick. 0 disables deadlines.
    started_at : datetime or None
        Set the first time the draft goes live.
    unique_roles : bool
        Each participant may draft at most one player per role, and
        only players with a role are draftable.
    """
    id: int
    name: str
    status: DraftStatus = DraftStatus.SCHEDULED
    scheduled_at: AwareDatetime
    started_at: Optional[AwareDatetime] = None
    round_count: int = Field(ge=1)
    pick_seconds: int = Field(ge=0)
    unique_roles: bool = False
    created_by_user_id: Optional[str] = None
    created_at: Optional[AwareDatetime] = None


class Participant(_Record):
    """A user seated in a draft at a 0-based draft_position."""
    draft_id: int
    user_id: str
    display_name: str
    draft_position: int = Field(ge=0)


class PlayerSeed(_Record):
    """A player as supplied by the pool provider, before it joins a draft."""
    player_name: str = Field(min_length=1)
    player_team: Optional[str] = None
    player_role: Optional[str] = None


class PlayerPoolEntry(PlayerSeed):
    """A claimable player. Canonical pool order is by player_name."""
    draft_id: int


class Pick(_Record):
    """A committed pick.

    ``participant_user_id`` is whose turn it was; ``picked_by_user_id``
    is who actually made it (the system actor for auto-picks).
    """
    draft_id: int
    overall_pick: int = Field(ge=1)
    round_number: int = Field(ge=1)
    round_pick: int = Field(ge=1)
    participant_user_id: str
    participant_display_name: str
    player_name: str
    picked_by_user_id: str
    picked_by_label: Optional[str] = None
    actor: PickActor = PickActor.PARTICIPANT
    picked_at: AwareDatetime

    @property
    def is_auto_pick(self) -> bool:
        return self.actor == PickActor.SYSTEM


class PresenceRecord(_Record):
    """Stored heartbeat/readiness row for one (draft, user)."""
    draft_id: int
    user_id: str
    is_online: bool = False
    is_ready: bool = False
    last_seen_at: Optional[AwareDatetime] = None


class TimeoutEvent(_Record):
    """Ledger entry written when automation resolves a lapsed deadline."""
    draft_id: int
    overall_pick: int
    round_number: int
    round_pick: int
    participant_user_id: str
    outcome: TimeoutOutcome
    player_name: Optional[str] = None
    created_at: AwareDatetime


# ============================================
# Derived values
# ============================================

class PickSlot(_Record):
    """Round, position in round and participant index of an overall pick."""
    overall_pick: int
    round_number: int
    round_pick: int
    participant_index: int


class NextPick(_Record):
    """The undecided pick and who is on the clock for it."""
    overall_pick: int
    round_number: int
    round_pick: int
    participant_user_id: str
    participant_display_name: str
    draft_position: int


class ParticipantPresence(_Record):
    """Presence as seen by the gate: online means a fresh heartbeat."""
    user_id: str
    display_name: str
    is_online: bool
    is_ready: bool
    last_seen_at: Optional[datetime] = None


# ============================================
# Operation results
# ============================================

class ActionResult(_Record):
    """Outcome of a mutating operation. Callers branch on ``code``."""
    ok: bool
    code: Optional[ResultCode] = None
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "ActionResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, code: ResultCode, error: str) -> "ActionResult":
        return cls(ok=False, code=code, error=error)


class DraftProcessingResult(BaseModel):
    """Advisory counters from one automation pass."""
    started_drafts: int = 0
    auto_picks: int = 0
    completed_drafts: int = 0
    failed_draft_ids: List[int] = Field(default_factory=list)

    def merge(self, other: "DraftProcessingResult") -> None:
        self.started_drafts += other.started_drafts
        self.auto_picks += other.auto_picks
        self.completed_drafts += other.completed_drafts
        self.failed_draft_ids.extend(other.failed_draft_ids)


class DraftSnapshot(_Record):
    """Everything a draft room needs to render, computed at ``server_now``."""
    draft: Draft
    participants: List[Participant]
    picks: List[Pick]
    available_players: List[PlayerPoolEntry]
    next_pick: Optional[NextPick] = None
    current_pick_deadline_at: Optional[datetime] = None
    participant_presence: List[ParticipantPresence]
    present_participant_count: int
    ready_participant_count: int
    server_now: datetime

    @property
    def total_pick_count(self) -> int:
        return len(self.participants) * self.draft.round_count

    @property
    def all_participants_present(self) -> bool:
        return self.present_participant_count == len(self.participants)

    @property
    def all_participants_ready(self) -> bool:
        return self.ready_participant_count == len(self.participants)
