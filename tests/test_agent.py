"""End-to-end tests for the question-answering agent with fake collaborators."""

from __future__ import annotations

from unittest.mock import MagicMock

from video_qa.agent import SCRAPE_FAILED_MESSAGE, SCRAPE_STARTED_MESSAGE, VideoQAAgent
from video_qa.ingestion.models import TranscriptChunk
from video_qa.retrieval.router import METADATA_UNAVAILABLE_MESSAGE, Intent

URL = "https://www.youtube.com/watch?v=abc123"


class ScriptedCompleter:
    """Fake model that logs every call into a shared list."""

    def __init__(self, name: str, response: str, log: list[tuple[str, str]]) -> None:
        self.name = name
        self.response = response
        self.log = log

    def complete(self, prompt: str) -> str:
        self.log.append((self.name, prompt))
        return self.response


def make_chunks(n: int = 10, metadata: dict[str, object] | None = None) -> list[TranscriptChunk]:
    meta = metadata if metadata is not None else {"video_id": "abc123", "title": "Demo"}
    return [
        TranscriptChunk(text=f"chunk {i}", order=i, video_id="abc123", metadata=meta)
        for i in range(n)
    ]


def make_agent(
    chunks: list[TranscriptChunk] | None = None,
    analysis: str = '{"answer": "A", "key_points": []}',
    trigger_scrape: MagicMock | None = None,
) -> tuple[VideoQAAgent, MagicMock, list[tuple[str, str]]]:
    log: list[tuple[str, str]] = []
    retrieve = MagicMock(return_value=chunks if chunks is not None else make_chunks())
    agent = VideoQAAgent(
        retrieve=retrieve,
        trigger_scrape=trigger_scrape or MagicMock(return_value="snap-1"),
        analyzer=ScriptedCompleter("analyzer", analysis, log),
        summarizer=ScriptedCompleter("summarizer", "Final answer", log),
    )
    return agent, retrieve, log


class TestPassthrough:
    def test_no_url_goes_straight_to_summarizer(self) -> None:
        agent, retrieve, log = make_agent()

        reply = agent.answer("hello, how are you?")

        assert reply.answer == "Final answer"
        assert reply.intent is Intent.PASSTHROUGH
        assert reply.video_id is None
        assert log == [("summarizer", "hello, how are you?")]
        retrieve.assert_not_called()


class TestScrape:
    def test_unknown_video_triggers_scrape(self) -> None:
        trigger = MagicMock(return_value="snap-1")
        agent, retrieve, log = make_agent(chunks=[], trigger_scrape=trigger)

        reply = agent.answer(f"summarize {URL}")

        assert reply.answer == SCRAPE_STARTED_MESSAGE
        assert reply.video_id == "abc123"
        retrieve.assert_called_once_with("", 40, "abc123")
        trigger.assert_called_once_with(URL)
        assert log == []

    def test_scrape_failure(self) -> None:
        trigger = MagicMock(side_effect=RuntimeError("boom"))
        agent, _, _ = make_agent(chunks=[], trigger_scrape=trigger)

        assert agent.answer(f"summarize {URL}").answer == SCRAPE_FAILED_MESSAGE

    def test_retrieval_error_counts_as_no_chunks(self) -> None:
        trigger = MagicMock(return_value="snap-1")
        agent, retrieve, _ = make_agent(trigger_scrape=trigger)
        retrieve.side_effect = RuntimeError("db down")

        reply = agent.answer(f"summarize {URL}")

        assert reply.answer == SCRAPE_STARTED_MESSAGE
        trigger.assert_called_once_with(URL)


class TestAnswering:
    def test_full_summary_runs_analysis_then_summary(self) -> None:
        agent, _, log = make_agent()

        reply = agent.answer(f"summarize {URL}")

        assert reply.answer == "Final answer"
        assert reply.intent is Intent.FULL_SUMMARY
        assert reply.video_id == "abc123"
        assert reply.chunks_used == 10
        assert [name for name, _ in log] == ["analyzer", "summarizer"]

    def test_sentiment(self) -> None:
        agent, retrieve, log = make_agent(analysis="Warm and upbeat.")

        reply = agent.answer(f"What's the sentiment of {URL}?")

        assert reply.intent is Intent.SENTIMENT
        assert [name for name, _ in log] == ["analyzer", "summarizer"]
        assert "sentiment, emotion, and tone" in log[0][1]
        assert "Warm and upbeat." in log[1][1]
        # only the chunk listing, never a topic search
        retrieve.assert_called_once_with("", 40, "abc123")

    def test_metadata_unavailable(self) -> None:
        agent, _, log = make_agent(chunks=make_chunks(metadata={"video_id": "abc123"}))

        reply = agent.answer(f"How many views does {URL} have?")

        assert reply.intent is Intent.METADATA
        assert reply.answer == METADATA_UNAVAILABLE_MESSAGE
        assert log == []

    def test_metadata_available(self) -> None:
        chunks = make_chunks(metadata={"video_id": "abc123", "views": 1234})
        agent, _, log = make_agent(chunks=chunks)

        reply = agent.answer(f"How many views does {URL} have?")

        assert reply.intent is Intent.METADATA
        assert '"views": 1234' in log[0][1]
        assert '"video_id"' not in log[0][1]

    def test_time_range_uses_metadata_duration(self) -> None:
        chunks = make_chunks(metadata={"video_id": "abc123", "duration": 600})
        agent, _, log = make_agent(chunks=chunks)

        reply = agent.answer(f"Summarize the last 2 minutes of {URL}")

        assert reply.intent is Intent.TIME_RANGE
        assert reply.chunks_used == 2
        assert "chunk 8\nchunk 9" in log[0][1]

    def test_duration_from_chunk_timing_without_metadata(self) -> None:
        chunks = [
            TranscriptChunk(
                text=f"chunk {i}",
                order=i,
                start_sec=float(i * 60),
                end_sec=float((i + 1) * 60),
                video_id="abc123",
                metadata={"video_id": "abc123"},
            )
            for i in range(10)
        ]
        agent, _, log = make_agent(chunks=chunks)

        reply = agent.answer(f"Summarize the last 2 minutes of {URL}")

        assert reply.intent is Intent.TIME_RANGE
        assert reply.chunks_used == 2
        assert "chunk 8\nchunk 9" in log[0][1]

    def test_non_json_analysis_still_answers(self) -> None:
        agent, _, log = make_agent(analysis="not json at all")

        reply = agent.answer(f"summarize {URL}")

        assert reply.answer == "Final answer"
        assert '"answer": "not json at all"' in log[1][1]
