"""Claude-powered analysis and user-facing answers over transcript chunks."""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Protocol

from anthropic import Anthropic
from anthropic.types import TextBlock

from video_qa.config import Settings, settings
from video_qa.ingestion.models import TranscriptChunk

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


class Completer(Protocol):
    """Anything that turns a prompt into text."""

    def complete(self, prompt: str) -> str: ...


class ClaudeCompleter:
    """Single-prompt completion against the Anthropic Messages API."""

    def __init__(
        self,
        temperature: float,
        max_tokens: int = 2048,
        model: str | None = None,
        api_key: str | None = None,
    ) -> None:
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.model = model or settings.llm_model
        self.client = Anthropic(api_key=api_key or settings.anthropic_api_key)

    def complete(self, prompt: str) -> str:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        # We always request plain text, so the first block should be a TextBlock.
        block = response.content[0]
        if not isinstance(block, TextBlock):
            raise ValueError(f"Expected TextBlock from Claude, got {type(block).__name__}")
        return block.text


def build_analyzer(config: Settings = settings) -> ClaudeCompleter:
    """Low-temperature model used for structured analysis."""
    return ClaudeCompleter(
        temperature=config.analyzer_temperature,
        max_tokens=config.max_output_tokens,
        model=config.llm_model,
        api_key=config.anthropic_api_key,
    )


def build_summarizer(config: Settings = settings) -> ClaudeCompleter:
    """Model used for user-facing prose and plain conversation."""
    return ClaudeCompleter(
        temperature=config.summarizer_temperature,
        max_tokens=config.max_output_tokens,
        model=config.llm_model,
        api_key=config.anthropic_api_key,
    )


@dataclass
class AnalysisResult:
    """Structured output of the analyzer model."""

    answer: str
    key_points: list[str] = field(default_factory=list)
    time_range: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _transcript_text(chunks: list[TranscriptChunk]) -> str:
    return "\n".join(c.text for c in chunks)


def parse_analysis(text: str) -> AnalysisResult:
    """Parse analyzer output into an :class:`AnalysisResult`.

    Accepts a bare JSON object or one wrapped in a fenced code block. Anything
    else becomes the ``answer`` with no key points.
    """
    candidate = text.strip()
    fenced = _FENCED_JSON_RE.search(candidate)
    if fenced:
        candidate = fenced.group(1)
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        return AnalysisResult(answer=text)
    if not isinstance(data, dict):
        return AnalysisResult(answer=text)

    key_points = data.get("key_points") or []
    if not isinstance(key_points, list):
        key_points = [str(key_points)]
    return AnalysisResult(
        answer=str(data.get("answer", "")),
        key_points=[str(p) for p in key_points],
        time_range=str(data.get("time_range") or ""),
    )


def analyze_segment(
    analyzer: Completer,
    chunks: list[TranscriptChunk],
    question: str,
) -> AnalysisResult:
    """Ask the analyzer for the facts in *chunks* that answer *question*.

    Args:
        analyzer: The structured-analysis model.
        chunks: Selected transcript chunks, in order.
        question: The user's original question.

    Returns:
        The parsed analysis; non-JSON output degrades to a plain answer.
    """
    prompt = (
        "You are an expert video analyst AI.\n"
        f'The user asked: "{question}"\n'
        "Here is the relevant part of a YouTube video transcript:\n"
        f'"""\n{_transcript_text(chunks)}\n"""\n\n'
        "Analyze the transcript and extract the most relevant facts, actions, or "
        "technical details that answer the user's question. Respond in structured "
        "JSON with keys: {\n"
        '  "answer": string,\n'
        '  "key_points": string[],\n'
        '  "time_range": string (if applicable)\n'
        "}"
    )
    return parse_analysis(analyzer.complete(prompt))


def analyze_sentiment(analyzer: Completer, chunks: list[TranscriptChunk]) -> AnalysisResult:
    """Describe the overall sentiment, emotion and tone of the transcript."""
    prompt = (
        "Analyze the overall sentiment, emotion, and tone of this YouTube video "
        f'transcript.\n"""\n{_transcript_text(chunks)}\n"""'
    )
    return AnalysisResult(answer=analyzer.complete(prompt))


def explain_metadata(
    analyzer: Completer,
    metadata: dict[str, Any],
    question: str,
) -> AnalysisResult:
    """Pick out and explain the metadata fields relevant to *question*."""
    prompt = (
        f"Here is the video metadata: {json.dumps(metadata, indent=2, default=str)}\n\n"
        f'The user asked: "{question}"\n\n'
        "Extract and explain the relevant metadata for the user's question."
    )
    return AnalysisResult(answer=analyzer.complete(prompt))


def summarize_for_user(
    summarizer: Completer,
    analysis: AnalysisResult,
    question: str,
) -> str:
    """Turn an analysis into a concise user-facing answer."""
    prompt = (
        "You are a helpful assistant.\n"
        f'The user asked: "{question}"\n'
        "Here is the analysis from another AI:\n"
        f"{json.dumps(analysis.to_dict(), indent=2)}\n\n"
        "Write a clear, concise, and engaging answer for the user, using the analysis "
        "above. If key_points are present, include them as a bullet list."
    )
    return summarizer.complete(prompt)
