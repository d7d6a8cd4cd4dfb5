"""Data models for the ingestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TranscriptSegment:
    """One timed line of a scraped transcript."""

    text: str
    start_sec: float | None = None
    end_sec: float | None = None


@dataclass
class VideoTranscript:
    """A scraped video reduced to what ingestion needs."""

    video_id: str
    text: str
    segments: list[TranscriptSegment] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TranscriptChunk:
    """An ordered slice of a video transcript.

    ``order`` is the 0-based position in the transcript. ``start_sec`` and
    ``end_sec`` are only set when the source transcript was timed.
    """

    text: str
    order: int
    start_sec: float | None = None
    end_sec: float | None = None
    video_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def has_timing(self) -> bool:
        return self.start_sec is not None and self.end_sec is not None
