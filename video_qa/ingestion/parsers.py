"""Parse scraped video payloads into transcripts ready for chunking."""

from __future__ import annotations

import json
import logging
from typing import Any

from video_qa.ingestion.models import TranscriptSegment, VideoTranscript
from video_qa.youtube import video_id_from_url

logger = logging.getLogger(__name__)

# Video-level fields copied onto every chunk so the metadata branch can use them
METADATA_FIELDS: tuple[str, ...] = (
    "url",
    "title",
    "youtuber",
    "channel_url",
    "subscribers",
    "views",
    "likes",
    "num_comments",
    "date_posted",
)


def _as_seconds(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def parse_formatted_transcript(raw: Any) -> list[TranscriptSegment]:
    """Parse a scraper ``formatted_transcript`` into segments.

    Accepts a list of segment dicts or the same list encoded as a JSON string
    (some scraper templates return it that way). Each segment needs ``text``;
    timing comes from ``start``/``start_time`` and ``end``/``end_time`` or
    ``duration``, all in seconds.

    Raises:
        ValueError: If *raw* is a string that is not valid JSON.
    """
    data = raw
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"formatted_transcript is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        return []

    segments: list[TranscriptSegment] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        text = item.get("text")
        if not isinstance(text, str) or not text.strip():
            continue
        start = _as_seconds(item.get("start", item.get("start_time")))
        end = _as_seconds(item.get("end", item.get("end_time")))
        duration = _as_seconds(item.get("duration"))
        if end is None and start is not None and duration is not None:
            end = start + duration
        segments.append(TranscriptSegment(text=text.strip(), start_sec=start, end_sec=end))
    return segments


def parse_video_payload(payload: dict[str, Any]) -> VideoTranscript | None:
    """Reduce a scraped video payload to a :class:`VideoTranscript`.

    The transcript text comes from ``transcript``, else the joined
    ``formatted_transcript`` segments, else the ``description``. A payload
    with none of these is skipped (returns None) rather than treated as an
    error.

    Raises:
        ValueError: If the payload identifies no video.
    """
    video_id = payload.get("video_id")
    if not video_id and isinstance(payload.get("url"), str):
        video_id = video_id_from_url(payload["url"])
    if not video_id:
        msg = f"Video payload has no video_id. Keys: {list(payload.keys())}"
        raise ValueError(msg)

    segments: list[TranscriptSegment] = []
    if payload.get("formatted_transcript"):
        try:
            segments = parse_formatted_transcript(payload["formatted_transcript"])
        except ValueError:
            logger.warning("Could not parse formatted_transcript for video %s", video_id)

    text = payload.get("transcript")
    if not isinstance(text, str) or not text.strip():
        text = " ".join(s.text for s in segments)
    if not text.strip() and isinstance(payload.get("description"), str):
        text = payload["description"]
    if not text.strip():
        logger.warning(
            "Received video %s without transcript, skipping. Available keys: %s",
            video_id,
            list(payload.keys()),
        )
        return None

    metadata: dict[str, Any] = {k: payload[k] for k in METADATA_FIELDS if payload.get(k) is not None}
    duration = payload.get("duration", payload.get("video_length"))
    if duration is not None:
        metadata["duration"] = duration

    return VideoTranscript(
        video_id=str(video_id),
        text=text.strip(),
        segments=segments,
        metadata=metadata,
    )
