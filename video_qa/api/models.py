"""Pydantic request/response schemas for the Video Q&A API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from video_qa.retrieval.router import Intent


class QueryRequest(BaseModel):
    """Request body for the /api/query endpoint."""

    question: str


class QueryResponse(BaseModel):
    """Response body for the /api/query endpoint."""

    answer: str
    intent: Intent | None = None
    video_id: str | None = None
    chunks_used: int = 0


class IngestResponse(BaseModel):
    """Response body for the /api/videos/ingest webhook.

    ``skipped`` lists videos that arrived without a usable transcript;
    ``errors`` lists payloads that could not be ingested at all.
    """

    videos_ingested: int
    chunks_stored: int
    skipped: list[str] = []
    errors: list[str] = []


VideoPayload = dict[str, Any]
