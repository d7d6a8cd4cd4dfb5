"""Resolved time references produced by the temporal extractors."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Instant:
    """A single point in the video, in seconds from the start."""

    seconds: int


@dataclass(frozen=True)
class MinuteMark:
    """The Nth minute of the video (1-based), e.g. "the 5th minute"."""

    minute: int


@dataclass(frozen=True)
class Range:
    """A window of the video, ``[start_seconds, end_seconds)``."""

    start_seconds: int
    end_seconds: int

    def clamped(self, duration_seconds: int) -> Range:
        """Return the range clamped into ``[0, duration_seconds]``."""
        start = min(max(0, self.start_seconds), duration_seconds)
        end = min(max(0, self.end_seconds), duration_seconds)
        return Range(start, max(start, end))


@dataclass(frozen=True)
class RelativeLastMinute:
    """The final minute of the video."""


TimeReference = Instant | MinuteMark | Range | RelativeLastMinute
