"""Intent router: decide which analysis handles a question about a video."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from video_qa.ingestion.models import TranscriptChunk
from video_qa.pipeline_config import ResolverConfig
from video_qa.retrieval.segments import select_by_reference
from video_qa.temporal.models import TimeReference
from video_qa.temporal.points import extract_point
from video_qa.temporal.ranges import extract_time_range
from video_qa.youtube import strip_urls

logger = logging.getLogger(__name__)

METADATA_UNAVAILABLE_MESSAGE = "Sorry, video metadata is not available."

# retrieve(query, k, video_id) -> chunks
Retriever = Callable[[str, int, str], list[TranscriptChunk]]


class Intent(StrEnum):
    """Which downstream capability answers the question."""

    TIME_RANGE = "time_range"
    TIMESTAMP = "timestamp"
    TOPIC = "topic"
    SENTIMENT = "sentiment"
    METADATA = "metadata"
    FULL_SUMMARY = "full_summary"
    PASSTHROUGH = "passthrough"


@dataclass
class VideoContext:
    """Everything the router knows about the video being asked about."""

    video_id: str | None = None
    url: str | None = None
    chunks: list[TranscriptChunk] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    duration_seconds: int | None = None

    @property
    def available_metadata(self) -> dict[str, Any]:
        """Metadata fields worth explaining (the video ID alone does not count)."""
        return {
            k: v for k, v in self.metadata.items() if k != "video_id" and v not in (None, "")
        }


@dataclass
class RoutedQuery:
    """Result of intent routing."""

    intent: Intent
    chunks: list[TranscriptChunk] = field(default_factory=list)
    time_reference: TimeReference | None = None
    topic: str | None = None
    message: str | None = None  # fixed reply; no analysis needed
    original_question: str = ""


_TOPIC_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\babout ([\w\s]+)", re.IGNORECASE),
    re.compile(r"\btopic ([\w\s]+)", re.IGNORECASE),
    re.compile(r'"([^"]+)"'),
]

_SENTIMENT_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\bsentiments?\b", re.IGNORECASE),
    re.compile(r"\bemotions?\b", re.IGNORECASE),
    re.compile(r"\bemotional\b", re.IGNORECASE),
    re.compile(r"\bfeelings?\b", re.IGNORECASE),
    re.compile(r"\btone\b", re.IGNORECASE),
]

_METADATA_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\bchannels?\b", re.IGNORECASE),
    re.compile(r"\bviews?\b", re.IGNORECASE),
    re.compile(r"\blikes?\b", re.IGNORECASE),
    re.compile(r"\bdates?\b", re.IGNORECASE),
    re.compile(r"\bpublished\b", re.IGNORECASE),
    re.compile(r"\bduration\b", re.IGNORECASE),
    re.compile(r"\blength\b", re.IGNORECASE),
]


def extract_topic(question: str) -> str | None:
    """Return the topic named by ``about X``, ``topic X`` or a quoted phrase."""
    for pattern in _TOPIC_PATTERNS:
        match = pattern.search(question)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def is_sentiment_request(question: str) -> bool:
    return any(p.search(question) for p in _SENTIMENT_PATTERNS)


def is_metadata_request(question: str) -> bool:
    return any(p.search(question) for p in _METADATA_PATTERNS)


class IntentRouter:
    """Rule-based router over a fixed priority order.

    Branches are evaluated in sequence and the first one that produces a
    result wins: time range, point in time, topic, sentiment, metadata, then
    a full-video summary. A context without a video ID is passed straight
    through to conversational completion.

    Args:
        retrieve: Topic search collaborator, ``retrieve(query, k, video_id)``.
            When omitted the topic branch never fires.
        config: Resolver assumptions (default duration, window widths).
    """

    def __init__(
        self,
        retrieve: Retriever | None = None,
        config: ResolverConfig | None = None,
    ) -> None:
        self.retrieve = retrieve
        self.config = config or ResolverConfig()

    def route(self, utterance: str, context: VideoContext) -> RoutedQuery:
        if not context.video_id:
            return RoutedQuery(intent=Intent.PASSTHROUGH, original_question=utterance)

        text = strip_urls(utterance)
        duration = context.duration_seconds or self.config.default_duration_seconds
        branches = (
            self._route_time_range,
            self._route_timestamp,
            self._route_topic,
            self._route_sentiment,
            self._route_metadata,
        )
        routed: RoutedQuery | None = None
        for branch in branches:
            routed = branch(text, context, duration)
            if routed is not None:
                break
        if routed is None:
            routed = RoutedQuery(
                intent=Intent.FULL_SUMMARY,
                chunks=sorted(context.chunks, key=lambda c: c.order),
            )

        routed.original_question = utterance
        logger.info(
            "Routed question for video %s to %s (%d chunks)",
            context.video_id,
            routed.intent,
            len(routed.chunks),
        )
        return routed

    resolve_and_route = route

    def _route_time_range(
        self, text: str, context: VideoContext, duration: int
    ) -> RoutedQuery | None:
        time_range = extract_time_range(text, duration, self.config.point_window_seconds)
        if time_range is None:
            return None
        segment = select_by_reference(context.chunks, time_range, duration, self.config)
        if not segment:
            return None
        return RoutedQuery(intent=Intent.TIME_RANGE, chunks=segment, time_reference=time_range)

    def _route_timestamp(
        self, text: str, context: VideoContext, duration: int
    ) -> RoutedQuery | None:
        point = extract_point(text)
        if point is None:
            return None
        segment = select_by_reference(context.chunks, point, duration, self.config)
        if not segment:
            return None
        return RoutedQuery(intent=Intent.TIMESTAMP, chunks=segment, time_reference=point)

    def _route_topic(self, text: str, context: VideoContext, duration: int) -> RoutedQuery | None:
        topic = extract_topic(text)
        if topic is None or self.retrieve is None or not context.video_id:
            return None
        try:
            found = self.retrieve(topic, self.config.topic_match_count, context.video_id)
        except Exception:
            logger.exception("Topic retrieval failed for video %s", context.video_id)
            return None
        if not found:
            return None
        return RoutedQuery(intent=Intent.TOPIC, chunks=found, topic=topic)

    def _route_sentiment(
        self, text: str, context: VideoContext, duration: int
    ) -> RoutedQuery | None:
        if not is_sentiment_request(text):
            return None
        return RoutedQuery(
            intent=Intent.SENTIMENT,
            chunks=sorted(context.chunks, key=lambda c: c.order),
        )

    def _route_metadata(
        self, text: str, context: VideoContext, duration: int
    ) -> RoutedQuery | None:
        if not is_metadata_request(text):
            return None
        if not context.available_metadata:
            return RoutedQuery(intent=Intent.METADATA, message=METADATA_UNAVAILABLE_MESSAGE)
        return RoutedQuery(intent=Intent.METADATA)
