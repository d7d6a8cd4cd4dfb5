"""Ingest webhook: receive scraped videos and store their transcripts."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Body, HTTPException

from video_qa.api.models import IngestResponse, VideoPayload
from video_qa.ingestion.pipeline import ingest_video

logger = logging.getLogger(__name__)

router = APIRouter()

# The scraper may deliver many videos per snapshot
MAX_VIDEOS_PER_REQUEST = 50


@router.post("/api/videos/ingest", response_model=IngestResponse)
async def ingest(
    payload: Annotated[list[VideoPayload] | VideoPayload, Body()],
) -> IngestResponse:
    """Ingest one scraped video or a batch of them.

    Each video is parsed, chunked, embedded and stored independently: a
    video without a transcript is reported in ``skipped`` and a payload that
    fails is reported in ``errors`` without affecting the rest of the batch.
    """
    videos = payload if isinstance(payload, list) else [payload]
    if len(videos) > MAX_VIDEOS_PER_REQUEST:
        raise HTTPException(
            status_code=413,
            detail=f"Received {len(videos)} videos; maximum is {MAX_VIDEOS_PER_REQUEST}.",
        )

    ingested = 0
    chunks_stored = 0
    skipped: list[str] = []
    errors: list[str] = []

    for i, video in enumerate(videos):
        label = str(video.get("video_id") or video.get("url") or f"item {i}")
        try:
            stored = ingest_video(video)
        except Exception as exc:
            logger.exception("Ingestion failed for %s", label)
            errors.append(f"{label}: {exc}")
            continue
        if stored is None:
            skipped.append(label)
            continue
        ingested += 1
        chunks_stored += stored

    return IngestResponse(
        videos_ingested=ingested,
        chunks_stored=chunks_stored,
        skipped=skipped,
        errors=errors,
    )
