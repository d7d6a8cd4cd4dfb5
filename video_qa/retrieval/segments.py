"""Map resolved time references onto ordered transcript chunks.

Chunk timing metadata is used when present. Without it the selectors fall
back to a proportional estimate that treats the chunks as evenly spread over
the video; the minute/seconds selectors assume a 10-minute video in that case.
None of these functions raise: empty input or out-of-range indices give ``[]``.
"""

from __future__ import annotations

import math

from video_qa.ingestion.models import TranscriptChunk
from video_qa.pipeline_config import ResolverConfig
from video_qa.temporal.models import (
    Instant,
    MinuteMark,
    Range,
    RelativeLastMinute,
    TimeReference,
)

_DEFAULT_CONFIG = ResolverConfig()


def _ordered(chunks: list[TranscriptChunk]) -> list[TranscriptChunk]:
    return sorted(chunks, key=lambda c: c.order)


def has_timing(chunks: list[TranscriptChunk]) -> bool:
    """True when at least one chunk carries start and end times."""
    return any(c.has_timing for c in chunks)


def _overlapping(chunks: list[TranscriptChunk], start: float, end: float) -> list[TranscriptChunk]:
    """Timed chunks whose ``[start_sec, end_sec)`` overlaps ``[start, end)``."""
    return [
        c
        for c in _ordered(chunks)
        if c.has_timing and c.start_sec < end and c.end_sec > start  # type: ignore[operator]
    ]


def _chunks_per_minute(count: int, config: ResolverConfig) -> int:
    return math.ceil(count / config.fallback_video_minutes)


def select_by_range(
    chunks: list[TranscriptChunk],
    start: int,
    end: int,
    duration_seconds: int,
) -> list[TranscriptChunk]:
    """Return the chunks covering ``[start, end)``.

    The range is clamped into ``[0, duration_seconds]`` first. Without timing
    metadata the slice is ``floor(start/D*n) : ceil(end/D*n)``.
    """
    if not chunks or duration_seconds <= 0:
        return []
    window = Range(int(start), int(end)).clamped(int(duration_seconds))
    if window.start_seconds >= window.end_seconds:
        return []

    if has_timing(chunks):
        return _overlapping(chunks, window.start_seconds, window.end_seconds)

    ordered = _ordered(chunks)
    count = len(ordered)
    # Integer floor/ceil of (seconds / duration * count)
    start_idx = window.start_seconds * count // int(duration_seconds)
    end_idx = -(-window.end_seconds * count // int(duration_seconds))
    return ordered[start_idx:end_idx]


def select_by_minute(
    chunks: list[TranscriptChunk],
    minute: int,
    config: ResolverConfig = _DEFAULT_CONFIG,
) -> list[TranscriptChunk]:
    """Return the chunks of the Nth (1-based) minute."""
    if not chunks or minute < 1:
        return []
    if has_timing(chunks):
        return _overlapping(chunks, (minute - 1) * 60, minute * 60)

    per_minute = _chunks_per_minute(len(chunks), config)
    return _ordered(chunks)[(minute - 1) * per_minute : minute * per_minute]


def select_by_seconds(
    chunks: list[TranscriptChunk],
    seconds: int,
    config: ResolverConfig = _DEFAULT_CONFIG,
) -> list[TranscriptChunk]:
    """Return the single chunk playing at *seconds*.

    Prefers a chunk with ``start_sec <= seconds < end_sec``; otherwise
    estimates the index as ``floor(seconds / (10 * 60) * n)``.
    """
    if not chunks or seconds < 0:
        return []
    ordered = _ordered(chunks)
    for chunk in ordered:
        if chunk.has_timing and chunk.start_sec <= seconds < chunk.end_sec:  # type: ignore[operator]
            return [chunk]

    idx = int(seconds) * len(ordered) // (config.fallback_video_minutes * 60)
    if idx >= len(ordered):
        return []
    return [ordered[idx]]


def select_last_minute(
    chunks: list[TranscriptChunk],
    config: ResolverConfig = _DEFAULT_CONFIG,
) -> list[TranscriptChunk]:
    """Return the chunks of the final minute."""
    if not chunks:
        return []
    if has_timing(chunks):
        last_end = max(c.end_sec for c in chunks if c.has_timing)  # type: ignore[type-var]
        return _overlapping(chunks, max(0.0, last_end - 60), last_end)

    per_minute = _chunks_per_minute(len(chunks), config)
    return _ordered(chunks)[-per_minute:]


def select_by_reference(
    chunks: list[TranscriptChunk],
    reference: TimeReference,
    duration_seconds: int,
    config: ResolverConfig = _DEFAULT_CONFIG,
) -> list[TranscriptChunk]:
    """Dispatch a resolved :data:`TimeReference` to the matching selector."""
    if isinstance(reference, Range):
        return select_by_range(
            chunks, reference.start_seconds, reference.end_seconds, duration_seconds
        )
    if isinstance(reference, MinuteMark):
        return select_by_minute(chunks, reference.minute, config)
    if isinstance(reference, Instant):
        return select_by_seconds(chunks, reference.seconds, config)
    if isinstance(reference, RelativeLastMinute):
        return select_last_minute(chunks, config)
    return []
