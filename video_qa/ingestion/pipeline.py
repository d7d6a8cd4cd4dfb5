"""End-to-end ingestion pipeline: parse -> chunk -> embed -> store."""

from __future__ import annotations

import logging
from typing import Any

from video_qa.config import settings
from video_qa.ingestion.chunking import chunk_transcript
from video_qa.ingestion.embeddings import embed_chunks
from video_qa.ingestion.parsers import parse_video_payload
from video_qa.ingestion.storage import (
    delete_video_chunks,
    get_supabase_client,
    store_chunks,
    store_video,
)

logger = logging.getLogger(__name__)


def ingest_video(payload: dict[str, Any]) -> int | None:
    """Full ingestion pipeline for one scraped video.

    Args:
        payload: A single video record as delivered by the scraper.

    Returns:
        The number of chunks stored, or None when the video had no usable
        transcript and was skipped.

    Raises:
        ValueError: If the payload identifies no video.
    """
    # 1. Parse
    video = parse_video_payload(payload)
    if video is None:
        return None

    logger.info("Ingesting video %s. Transcript length: %d chars", video.video_id, len(video.text))

    # 2. Chunk
    chunks = chunk_transcript(video, settings.chunk_size, settings.chunk_overlap)

    # 3. Embed
    chunks_with_embeddings = embed_chunks(chunks)

    # 4. Store (replacing any earlier ingest of the same video)
    client = get_supabase_client()
    store_video(client, video)
    delete_video_chunks(client, video.video_id)
    store_chunks(client, chunks_with_embeddings)

    logger.info("Stored %d chunks for video %s", len(chunks), video.video_id)
    return len(chunks)
