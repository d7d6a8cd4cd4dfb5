"""Tests for mapping time references onto transcript chunks."""

from __future__ import annotations

import random

from video_qa.ingestion.models import TranscriptChunk
from video_qa.pipeline_config import ResolverConfig
from video_qa.retrieval.segments import (
    has_timing,
    select_by_minute,
    select_by_range,
    select_by_reference,
    select_by_seconds,
    select_last_minute,
)
from video_qa.temporal.models import Instant, MinuteMark, Range, RelativeLastMinute


def untimed(n: int) -> list[TranscriptChunk]:
    return [TranscriptChunk(text=f"chunk {i}", order=i) for i in range(n)]


def timed(n: int, seconds_each: int = 60) -> list[TranscriptChunk]:
    """Chunk i spans [i * seconds_each, (i + 1) * seconds_each)."""
    return [
        TranscriptChunk(
            text=f"chunk {i}",
            order=i,
            start_sec=float(i * seconds_each),
            end_sec=float((i + 1) * seconds_each),
        )
        for i in range(n)
    ]


def orders(chunks: list[TranscriptChunk]) -> list[int]:
    return [c.order for c in chunks]


class TestHasTiming:
    def test_untimed(self) -> None:
        assert not has_timing(untimed(3))

    def test_timed(self) -> None:
        assert has_timing(timed(3))

    def test_empty(self) -> None:
        assert not has_timing([])


class TestSelectByRange:
    def test_empty_chunks(self) -> None:
        assert select_by_range([], 0, 100, 600) == []

    def test_proportional_start(self) -> None:
        assert orders(select_by_range(untimed(10), 0, 120, 600)) == [0, 1]

    def test_proportional_end(self) -> None:
        assert orders(select_by_range(untimed(10), 300, 600, 600)) == [5, 6, 7, 8, 9]

    def test_proportional_clamps_to_duration(self) -> None:
        assert orders(select_by_range(untimed(10), 500, 9999, 600)) == [8, 9]

    def test_timed_overlap(self) -> None:
        assert orders(select_by_range(timed(10), 90, 200, 600)) == [1, 2, 3]

    def test_timed_boundaries_are_half_open(self) -> None:
        assert orders(select_by_range(timed(10), 60, 120, 600)) == [1]

    def test_empty_window(self) -> None:
        assert select_by_range(untimed(10), 120, 120, 600) == []

    def test_window_past_end_of_video(self) -> None:
        assert select_by_range(untimed(10), 700, 900, 600) == []

    def test_zero_duration(self) -> None:
        assert select_by_range(untimed(10), 0, 60, 0) == []

    def test_result_in_transcript_order(self) -> None:
        chunks = untimed(10)
        random.Random(7).shuffle(chunks)
        assert orders(select_by_range(chunks, 0, 300, 600)) == [0, 1, 2, 3, 4]


class TestSelectByMinute:
    def test_proportional(self) -> None:
        # 20 chunks over an assumed 10-minute video -> 2 chunks per minute
        assert orders(select_by_minute(untimed(20), 3)) == [4, 5]

    def test_first_minute(self) -> None:
        assert orders(select_by_minute(untimed(20), 1)) == [0, 1]

    def test_minute_zero(self) -> None:
        assert select_by_minute(untimed(20), 0) == []

    def test_minute_past_end(self) -> None:
        assert select_by_minute(untimed(20), 11) == []

    def test_timed(self) -> None:
        assert orders(select_by_minute(timed(10), 2)) == [1]

    def test_fallback_length_is_configurable(self) -> None:
        config = ResolverConfig(fallback_video_minutes=5)
        assert orders(select_by_minute(untimed(10), 2, config)) == [2, 3]

    def test_empty(self) -> None:
        assert select_by_minute([], 1) == []


class TestSelectBySeconds:
    def test_exact_timing_match(self) -> None:
        assert orders(select_by_seconds(timed(10), 150)) == [2]

    def test_proportional(self) -> None:
        assert orders(select_by_seconds(untimed(10), 150)) == [2]

    def test_proportional_out_of_range(self) -> None:
        assert select_by_seconds(untimed(10), 900) == []

    def test_timed_miss_falls_back_to_estimate(self) -> None:
        # timed span ends at 300s; 450s estimates index floor(450/600*5) = 3
        assert orders(select_by_seconds(timed(5), 450)) == [3]

    def test_empty(self) -> None:
        assert select_by_seconds([], 10) == []


class TestSelectLastMinute:
    def test_proportional(self) -> None:
        assert orders(select_last_minute(untimed(25))) == [22, 23, 24]

    def test_timed(self) -> None:
        assert orders(select_last_minute(timed(10))) == [9]

    def test_timed_short_chunks(self) -> None:
        assert orders(select_last_minute(timed(10, seconds_each=20))) == [7, 8, 9]

    def test_empty(self) -> None:
        assert select_last_minute([]) == []


class TestSelectByReference:
    def test_dispatch(self) -> None:
        chunks = untimed(10)
        assert orders(select_by_reference(chunks, Range(0, 120), 600)) == [0, 1]
        assert orders(select_by_reference(chunks, MinuteMark(4), 600)) == [3]
        assert orders(select_by_reference(chunks, Instant(150), 600)) == [2]
        assert orders(select_by_reference(chunks, RelativeLastMinute(), 600)) == [9]
