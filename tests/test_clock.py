# Area: Shared Tests
"""Tests for the injectable clocks."""

from datetime import datetime, timezone

import pytest

from draft_engine import Clock, ManualClock, SystemClock


class TestClock:
    """Tests for Clock implementations."""

    def test_clock_is_abstract(self):
        with pytest.raises(TypeError):
            Clock()

    def test_system_clock_is_aware(self):
        assert SystemClock().now().tzinfo is not None

    def test_manual_clock_moves_only_when_told(self):
        start = datetime(2026, 5, 1, tzinfo=timezone.utc)
        clock = ManualClock(start)
        assert clock.now() == start
        clock.advance(90)
        assert (clock.now() - start).total_seconds() == 90
        clock.set(start)
        assert clock.now() == start
