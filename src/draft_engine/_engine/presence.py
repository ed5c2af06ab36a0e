# Area: Engine
"""
draft_engine._engine.presence — Presence gate
=============================================

Builds the per-participant presence view from stored heartbeat rows and
decides whether a draft may go live.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Sequence

from ..types import Participant, ParticipantPresence, PresenceRecord

DEFAULT_HEARTBEAT_WINDOW_SECONDS = 45


def build_participant_presence(
    participants: Sequence[Participant],
    presence_rows: Sequence[PresenceRecord],
    now: datetime,
    heartbeat_window_seconds: int = DEFAULT_HEARTBEAT_WINDOW_SECONDS,
) -> List[ParticipantPresence]:
    """
    Join participants with their presence rows.

    A participant is online when the stored flag is set and the last
    heartbeat is no older than the window. Participants without a row
    are offline and not ready.

    Args:
        participants: Draft participants
        presence_rows: Stored presence records for the draft
        now: Current instant
        heartbeat_window_seconds: Maximum heartbeat age to count as online

    Returns:
        One ParticipantPresence per participant, in draft order
    """
    by_user = {row.user_id: row for row in presence_rows}
    window = timedelta(seconds=heartbeat_window_seconds)
    view: List[ParticipantPresence] = []

    for participant in sorted(participants, key=lambda p: p.draft_position):
        row = by_user.get(participant.user_id)
        last_seen = row.last_seen_at if row else None
        fresh = last_seen is not None and now - last_seen <= window
        view.append(ParticipantPresence(
            user_id=participant.user_id,
            display_name=participant.display_name,
            is_online=bool(row and row.is_online and fresh),
            is_ready=bool(row and row.is_ready),
            last_seen_at=last_seen,
        ))
    return view


def can_go_live(
    participants: Sequence[Participant],
    presence: Sequence[ParticipantPresence],
    force: bool = False,
) -> bool:
    """
    Decide whether a draft may transition into LIVE.

    True when forced, or when every participant is online and ready.
    """
    if force:
        return True
    by_user = {entry.user_id: entry for entry in presence}
    for participant in participants:
        entry = by_user.get(participant.user_id)
        if entry is None or not (entry.is_online and entry.is_ready):
            return False
    return True
