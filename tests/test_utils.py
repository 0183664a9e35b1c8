"""Tests for scriptor.utils module."""

from __future__ import annotations

from scriptor.utils import format_duration


class TestFormatDuration:
    def test_seconds_only(self) -> None:
        assert format_duration(45) == "0:45"

    def test_minutes_and_seconds(self) -> None:
        assert format_duration(125) == "2:05"

    def test_hours_minutes_seconds(self) -> None:
        assert format_duration(3725) == "1:02:05"

    def test_zero(self) -> None:
        assert format_duration(0) == "0:00"
