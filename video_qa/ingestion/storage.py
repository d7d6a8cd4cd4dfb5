"""Supabase storage helpers for videos and transcript chunks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from supabase import Client, create_client

from video_qa.config import settings

if TYPE_CHECKING:
    from video_qa.ingestion.models import TranscriptChunk, VideoTranscript


def get_supabase_client() -> Client:
    """Create and return a Supabase client from settings."""
    return create_client(settings.supabase_url, settings.supabase_key)


def store_video(client: Client, video: VideoTranscript) -> None:
    """Upsert the video row (one per video ID)."""
    client.table("videos").upsert(
        {
            "video_id": video.video_id,
            "title": video.metadata.get("title"),
            "metadata": video.metadata,
            "transcript_length": len(video.text),
        },
        on_conflict="video_id",
    ).execute()


def delete_video_chunks(client: Client, video_id: str) -> None:
    """Remove previously stored chunks so re-ingesting a video does not duplicate them."""
    client.table("chunks").delete().eq("video_id", video_id).execute()


def store_chunks(
    client: Client,
    chunks_with_embeddings: list[tuple[TranscriptChunk, list[float]]],
) -> None:
    """Store chunks with embeddings in Supabase (batched by 50)."""
    rows: list[dict[str, Any]] = []
    for chunk, embedding in chunks_with_embeddings:
        rows.append(
            {
                "video_id": chunk.video_id,
                "content": chunk.text,
                "chunk_index": chunk.order,
                "start_time": chunk.start_sec,
                "end_time": chunk.end_sec,
                "metadata": chunk.metadata,
                "embedding": embedding,
            }
        )

    # Insert in batches of 50
    batch_size = 50
    for i in range(0, len(rows), batch_size):
        client.table("chunks").insert(rows[i : i + batch_size]).execute()
