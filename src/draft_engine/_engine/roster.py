# Area: Engine
"""
draft_engine._engine.roster — Role rules
========================================

Drafts created with ``unique_roles`` let each participant hold at most
one player per role (compared trimmed and case-insensitively), and
players without a role cannot be drafted at all. Both human picks and
timeout auto-picks obey the rule. Drafts without the setting ignore
roles entirely.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Set

from ..types import PlayerPoolEntry
from .enums import ResultCode


def normalize_role(role: Optional[str]) -> Optional[str]:
    """Canonical form of a role, or None when blank."""
    if role is None:
        return None
    cleaned = role.strip().upper()
    return cleaned or None


def held_role_set(roles: Iterable[Optional[str]]) -> Set[str]:
    """Normalized roles a participant already holds."""
    return {r for r in (normalize_role(role) for role in roles) if r is not None}


def check_role(
    player_role: Optional[str],
    held_roles: Set[str],
    unique_roles: bool,
) -> Optional[ResultCode]:
    """
    Check a requested player against the role rule.

    Returns:
        None if the pick is allowed, otherwise PLAYER_ROLE_REQUIRED or
        POSITION_TAKEN
    """
    if not unique_roles:
        return None
    role = normalize_role(player_role)
    if role is None:
        return ResultCode.PLAYER_ROLE_REQUIRED
    if role in held_roles:
        return ResultCode.POSITION_TAKEN
    return None


def select_auto_pick(
    available: Sequence[PlayerPoolEntry],
    held_roles: Set[str],
    unique_roles: bool,
) -> Optional[PlayerPoolEntry]:
    """First player in canonical order the participant may draft, or None."""
    for entry in available:
        if check_role(entry.player_role, held_roles, unique_roles) is None:
            return entry
    return None
