# Area: Engine
"""
Pure draft-turn logic with no I/O.

This package contains:
- Status, result-code and actor enums
- Pick slot resolution (third-round reversal snake order)
- Current pick deadline calculation
- Presence gate for going live
- Role rules for unique_roles drafts
- Draft status state machine

Modules are imported directly (``from draft_engine._engine.slots import ...``).
"""
