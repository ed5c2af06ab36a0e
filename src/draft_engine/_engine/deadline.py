# Area: Engine
"""
draft_engine._engine.deadline — Current pick deadline
=====================================================

The clock for a pick starts at the previous pick (or at draft start for
the first pick) and runs for ``pick_seconds``.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..types import Pick
from .enums import DraftStatus


def resolve_current_pick_deadline(
    pick_seconds: int,
    status: DraftStatus,
    started_at: Optional[datetime],
    picks: Sequence[Pick],
) -> Optional[datetime]:
    """
    Compute when the current pick expires.

    Args:
        pick_seconds: Seconds allowed per pick (<= 0 disables deadlines)
        status: Current draft status
        started_at: When the draft first went live
        picks: Picks made so far, ordered by overall_pick

    Returns:
        Expiry instant, or None if no deadline applies
    """
    if status != DraftStatus.LIVE or pick_seconds <= 0:
        return None

    anchor = picks[-1].picked_at if picks else started_at
    if anchor is None:
        return None
    return anchor + timedelta(seconds=pick_seconds)


def is_deadline_expired(deadline: Optional[datetime], now: datetime) -> bool:
    """A deadline has passed once ``now`` reaches it. None never expires."""
    return deadline is not None and deadline <= now
