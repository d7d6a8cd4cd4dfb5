"""Answer a question about a YouTube video: resolve, route, analyze, summarize."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from video_qa.config import Settings, settings
from video_qa.ingestion.models import TranscriptChunk
from video_qa.pipeline_config import ResolverConfig
from video_qa.retrieval.generation import (
    AnalysisResult,
    Completer,
    analyze_segment,
    analyze_sentiment,
    explain_metadata,
    summarize_for_user,
)
from video_qa.retrieval.router import Intent, IntentRouter, Retriever, RoutedQuery, VideoContext
from video_qa.temporal.expressions import duration_from_metadata
from video_qa.youtube import extract_youtube_url, video_id_from_url

logger = logging.getLogger(__name__)

SCRAPE_STARTED_MESSAGE = "The video is being scraped. Please wait about 10 seconds and ask again."
SCRAPE_FAILED_MESSAGE = "Failed to trigger scraping for this video."


@dataclass
class AgentReply:
    """A user-facing answer plus how it was produced."""

    answer: str
    intent: Intent | None = None
    video_id: str | None = None
    chunks_used: int = 0


class VideoQAAgent:
    """Orchestrates retrieval, intent routing and the two-stage LLM answer.

    Analysis always runs before the user-facing summary. Collaborators are
    injected so the agent can run against fakes.

    Args:
        retrieve: ``retrieve(query, k, video_id)``; an empty query lists
            chunks in transcript order.
        trigger_scrape: Starts collection of a video with no stored chunks.
        analyzer: Structured-analysis model.
        summarizer: User-facing model, also used for plain conversation.
        config: Resolver assumptions passed to the router.
        chunk_limit: How many chunks to load for a video.
    """

    def __init__(
        self,
        retrieve: Retriever,
        trigger_scrape: Callable[[str], object],
        analyzer: Completer,
        summarizer: Completer,
        config: ResolverConfig | None = None,
        chunk_limit: int = 40,
    ) -> None:
        self.retrieve = retrieve
        self.trigger_scrape = trigger_scrape
        self.analyzer = analyzer
        self.summarizer = summarizer
        self.config = config or ResolverConfig()
        self.chunk_limit = chunk_limit
        self.router = IntentRouter(retrieve=retrieve, config=self.config)

    def answer(self, utterance: str) -> AgentReply:
        url = extract_youtube_url(utterance)
        if url is None:
            routed = self.router.route(utterance, VideoContext())
            return self._respond(routed, VideoContext())

        video_id = video_id_from_url(url)
        chunks = self._load_chunks(video_id) if video_id else []
        if not chunks:
            return AgentReply(answer=self._start_scrape(url), video_id=video_id)

        metadata = dict(chunks[0].metadata)
        context = VideoContext(
            video_id=video_id,
            url=url,
            chunks=chunks,
            metadata=metadata,
            duration_seconds=self._estimate_duration(metadata, chunks),
        )
        routed = self.router.route(utterance, context)
        reply = self._respond(routed, context)
        reply.video_id = video_id
        return reply

    def _estimate_duration(self, metadata: dict[str, Any], chunks: list[TranscriptChunk]) -> int:
        """Metadata duration, else the last timed chunk's end, else the default.

        Only ``chunk_limit`` chunks are loaded, so the timing estimate is a
        lower bound on the real length.
        """
        duration = duration_from_metadata(metadata.get("duration"), 0)
        if duration:
            return duration
        ends = [c.end_sec for c in chunks if c.has_timing]
        if ends:
            return math.ceil(max(ends))  # type: ignore[type-var]
        return self.config.default_duration_seconds

    def _load_chunks(self, video_id: str) -> list[TranscriptChunk]:
        try:
            return self.retrieve("", self.chunk_limit, video_id)
        except Exception:
            logger.exception("Chunk retrieval failed for video %s", video_id)
            return []

    def _start_scrape(self, url: str) -> str:
        try:
            self.trigger_scrape(url)
        except Exception:
            logger.exception("Failed to trigger scrape for %s", url)
            return SCRAPE_FAILED_MESSAGE
        return SCRAPE_STARTED_MESSAGE

    def _respond(self, routed: RoutedQuery, context: VideoContext) -> AgentReply:
        question = routed.original_question

        if routed.intent is Intent.PASSTHROUGH:
            return AgentReply(answer=self.summarizer.complete(question), intent=routed.intent)

        if routed.message is not None:
            return AgentReply(answer=routed.message, intent=routed.intent)

        analysis: AnalysisResult
        if routed.intent is Intent.SENTIMENT:
            analysis = analyze_sentiment(self.analyzer, routed.chunks)
        elif routed.intent is Intent.METADATA:
            analysis = explain_metadata(self.analyzer, context.available_metadata, question)
        else:
            analysis = analyze_segment(self.analyzer, routed.chunks, question)

        return AgentReply(
            answer=summarize_for_user(self.summarizer, analysis, question),
            intent=routed.intent,
            chunks_used=len(routed.chunks),
        )


def build_agent(config: Settings = settings) -> VideoQAAgent:
    """Wire the agent to Supabase, Claude and the scraper from settings."""
    from video_qa.ingestion.scraper import trigger_scrape
    from video_qa.retrieval.generation import build_analyzer, build_summarizer
    from video_qa.retrieval.search import retrieve

    return VideoQAAgent(
        retrieve=retrieve,
        trigger_scrape=trigger_scrape,
        analyzer=build_analyzer(config),
        summarizer=build_summarizer(config),
        config=ResolverConfig.from_settings(config),
        chunk_limit=config.transcript_chunk_limit,
    )
