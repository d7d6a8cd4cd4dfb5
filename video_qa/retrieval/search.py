"""Transcript chunk retrieval: ordered listing and semantic search."""

from __future__ import annotations

from typing import Any, cast

from openai import OpenAI

from video_qa.config import settings
from video_qa.ingestion.models import TranscriptChunk
from video_qa.ingestion.storage import get_supabase_client


def _row_to_chunk(row: dict[str, Any]) -> TranscriptChunk:
    return TranscriptChunk(
        text=row.get("content") or "",
        order=int(row.get("chunk_index") or 0),
        start_sec=row.get("start_time"),
        end_sec=row.get("end_time"),
        video_id=row.get("video_id"),
        metadata=row.get("metadata") or {},
    )


def get_query_embedding(query: str, model: str | None = None) -> list[float]:
    """Generate an embedding vector for the given query string."""
    client = OpenAI(api_key=settings.openai_api_key or None)
    response = client.embeddings.create(input=[query], model=model or settings.embedding_model)
    return response.data[0].embedding


def list_chunks(video_id: str, limit: int) -> list[TranscriptChunk]:
    """Return the first *limit* chunks of a video in transcript order."""
    client = get_supabase_client()
    result = (
        client.table("chunks")
        .select("video_id,content,chunk_index,start_time,end_time,metadata")
        .eq("video_id", video_id)
        .order("chunk_index")
        .limit(limit)
        .execute()
    )
    # Supabase .data is typed as JSON (broad union); cast to concrete type.
    return [_row_to_chunk(r) for r in cast(list[dict[str, Any]], result.data)]


def semantic_search(query: str, match_count: int, video_id: str) -> list[TranscriptChunk]:
    """Vector similarity search over one video's chunks using match_chunks."""
    embedding = get_query_embedding(query)
    client = get_supabase_client()
    result = client.rpc(
        "match_chunks",
        {
            "query_embedding": embedding,
            "match_count": match_count,
            "filter_video_id": video_id,
        },
    ).execute()
    return [_row_to_chunk(r) for r in cast(list[dict[str, Any]], result.data)]


def retrieve(query: str, k: int, video_id: str) -> list[TranscriptChunk]:
    """Retrieve up to *k* chunks of a video.

    An empty *query* lists chunks in transcript order; anything else is a
    similarity search ranked by relevance.
    """
    if not query.strip():
        return list_chunks(video_id, k)
    return semantic_search(query, k, video_id)
