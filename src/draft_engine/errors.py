"""
draft_engine.errors — Custom exception classes
===============================================

Defines the exception hierarchy for faults the engine raises.
Business-rule violations are not exceptions; they come back as
ActionResult values with a ResultCode.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json


class DraftEngineError(Exception):
    """Base exception for all draft engine errors."""
    pass


class InvalidArgumentError(DraftEngineError, ValueError):
    """Raised for malformed slot or pick-count inputs or naive timestamps (a caller bug)."""

    def __init__(self, argument: str, value: Any, reason: str):
        self.argument = argument
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {argument}={value!r}: {reason}")


class InvalidStatusTransitionError(DraftEngineError, ValueError):
    """Raised by the state machine for an illegal or gated status change."""

    def __init__(self, current: Any, target: Any, message: str):
        self.current = current
        self.target = target
        super().__init__(message)


class StoreFailure(DraftEngineError):
    """Raised when the transactional store fails; wraps the driver error."""

    def __init__(
        self,
        operation: str,
        cause: BaseException,
        draft_id: Optional[int] = None,
    ):
        self.operation = operation
        self.cause = cause
        self.draft_id = draft_id
        scope = f" (draft {draft_id})" if draft_id is not None else ""
        super().__init__(f"Store failure during {operation}{scope}: {cause}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="STORE_FAILURE",
            operation=self.operation,
            context={
                "draft_id": self.draft_id,
                "cause_type": type(self.cause).__name__,
                "cause": str(self.cause),
            },
        )


def _format_error_block(
    error_type: str,
    operation: str,
    context: Dict[str, Any],
) -> str:
    """Format a structured error block for logs."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " DRAFT ENGINE ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Operation:    {operation}",
        "",
        " ── CONTEXT " + "─" * 52,
        _indent_json(context),
        "",
        "=" * 64,
        "",
    ]
    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
