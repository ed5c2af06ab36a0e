"""
draft_engine — Snake Draft Turn Engine
======================================

Runs multi-participant, round-based drafts: turn order (snake with a
third-round reversal), per-pick deadlines with automatic picks, and
atomic pick submission with exactly one winner per slot.

Quick Start:
    from draft_engine import DraftEngine, EngineConfig, PlayerSeed
    engine = DraftEngine(EngineConfig(db_path="drafts.db"))
    engine.initialize()
    draft_id = engine.create_draft(
        "Spring Split", scheduled_at, round_count=5, pick_seconds=60,
        participants=[("u1", "Ann"), ("u2", "Bo")],
        players=[PlayerSeed(player_name="Faker"), ...],
    )
    engine.submit_pick(draft_id, "u1", "Ann", "Faker")

Periodic timer:
    python -m draft_engine process-due

Pure helpers
------------
    from draft_engine import get_pick_slot, resolve_next_pick
    get_pick_slot(4, 5)   # round 2, reversed: participant index 3
"""

from ._engine.deadline import resolve_current_pick_deadline
from ._engine.enums import DraftStatus, PickActor, ResultCode, TimeoutOutcome
from ._engine.presence import build_participant_presence, can_go_live
from ._engine.slots import get_pick_slot, is_reversed_round, resolve_next_pick
from ._engine.state_machine import DraftStateMachine
from ._shared.clock import Clock, ManualClock, SystemClock
from ._shared.logging_config import setup_logging
from .automation import AutomationProcessor
from .config import EngineConfig, load_config
from .engine import DraftEngine
from .errors import (
    DraftEngineError,
    InvalidArgumentError,
    InvalidStatusTransitionError,
    StoreFailure,
)
from .submission import PickSubmission
from .types import (
    ActionResult,
    Draft,
    DraftProcessingResult,
    DraftSnapshot,
    NextPick,
    Participant,
    ParticipantPresence,
    Pick,
    PickSlot,
    PlayerPoolEntry,
    PlayerSeed,
    PresenceRecord,
    TimeoutEvent,
)

__all__ = [
    # Main classes
    "DraftEngine",
    "EngineConfig",
    "load_config",
    "AutomationProcessor",
    "PickSubmission",
    "DraftStateMachine",
    # Clocks and logging
    "Clock",
    "ManualClock",
    "SystemClock",
    "setup_logging",
    # Pure functions
    "get_pick_slot",
    "is_reversed_round",
    "resolve_next_pick",
    "resolve_current_pick_deadline",
    "build_participant_presence",
    "can_go_live",
    # Enums
    "DraftStatus",
    "PickActor",
    "ResultCode",
    "TimeoutOutcome",
    # Errors
    "DraftEngineError",
    "InvalidArgumentError",
    "InvalidStatusTransitionError",
    "StoreFailure",
    # Types
    "ActionResult",
    "Draft",
    "DraftProcessingResult",
    "DraftSnapshot",
    "NextPick",
    "Participant",
    "ParticipantPresence",
    "Pick",
    "PickSlot",
    "PlayerPoolEntry",
    "PlayerSeed",
    "PresenceRecord",
    "TimeoutEvent",
]
__version__ = "1.0.0"
