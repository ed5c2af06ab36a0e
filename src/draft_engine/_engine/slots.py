# Area: Engine
"""
draft_engine._engine.slots — Pick Slot Resolution
=================================================

Maps a global pick number to its round, position in round, and the
participant on the clock.

Turn order is a "third-round reversal" snake:

    Round 1:  0, 1, 2, ..., N-1
    Round 2:  N-1, ..., 1, 0
    Round 3:  N-1, ..., 1, 0
    Round 4:  0, 1, 2, ..., N-1
    Round 5+: reversed when the round number is odd, forward when even
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..errors import InvalidArgumentError
from ..types import NextPick, Participant, Pick, PickSlot


def is_reversed_round(round_number: int) -> bool:
    """
    Check whether a round runs in reverse draft order.

    Args:
        round_number: 1-based round number

    Returns:
        True for rounds 2 and 3, and for odd rounds from 5 on
    """
    if round_number <= 1:
        return False
    if round_number in (2, 3):
        return True
    return round_number % 2 == 1


def get_pick_slot(participant_count: int, overall_pick: int) -> PickSlot:
    """
    Resolve the slot for a 1-based overall pick number.

    Args:
        participant_count: Number of participants in the draft (>= 2)
        overall_pick: 1-based overall pick number (>= 1)

    Returns:
        PickSlot with round, position in round and participant index

    Raises:
        InvalidArgumentError: If either input is out of range
    """
    if participant_count < 2:
        raise InvalidArgumentError(
            "participant_count", participant_count,
            "at least 2 participants are required",
        )
    if overall_pick < 1:
        raise InvalidArgumentError("overall_pick", overall_pick, "must be >= 1")

    round_number = (overall_pick + participant_count - 1) // participant_count
    offset = (overall_pick - 1) % participant_count
    if is_reversed_round(round_number):
        participant_index = participant_count - 1 - offset
    else:
        participant_index = offset

    return PickSlot(
        overall_pick=overall_pick,
        round_number=round_number,
        round_pick=offset + 1,
        participant_index=participant_index,
    )


def total_pick_count(participant_count: int, round_count: int) -> int:
    """Total number of picks a draft will make."""
    return participant_count * round_count


def resolve_next_pick(
    participants: Sequence[Participant],
    picks: Sequence[Pick],
    round_count: int,
) -> Optional[NextPick]:
    """
    Resolve the next undecided pick, or None when the draft is exhausted.

    Args:
        participants: Draft participants (any order)
        picks: Picks made so far
        round_count: Number of rounds in the draft

    Returns:
        NextPick for the participant on the clock, or None
    """
    total = total_pick_count(len(participants), round_count)
    if total == 0 or len(picks) >= total:
        return None

    ordered = sorted(participants, key=lambda p: p.draft_position)
    slot = get_pick_slot(len(ordered), len(picks) + 1)
    participant = ordered[slot.participant_index]
    return NextPick(
        overall_pick=slot.overall_pick,
        round_number=slot.round_number,
        round_pick=slot.round_pick,
        participant_user_id=participant.user_id,
        participant_display_name=participant.display_name,
        draft_position=participant.draft_position,
    )
