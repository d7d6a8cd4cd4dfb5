"""Embedding helpers using OpenAI text-embedding-3-small."""

from __future__ import annotations

from openai import OpenAI

from video_qa.config import settings
from video_qa.ingestion.models import TranscriptChunk


def embed_texts(texts: list[str], model: str | None = None) -> list[list[float]]:
    """Embed a list of texts using the OpenAI embeddings API.

    Args:
        texts: Strings to embed.
        model: OpenAI embedding model name (defaults to ``settings.embedding_model``).

    Returns:
        A list of embedding vectors (one per input text).
    """
    client = OpenAI(api_key=settings.openai_api_key or None)
    response = client.embeddings.create(input=texts, model=model or settings.embedding_model)
    return [item.embedding for item in response.data]


def embed_chunks(chunks: list[TranscriptChunk]) -> list[tuple[TranscriptChunk, list[float]]]:
    """Embed chunks and return ``(chunk, embedding)`` pairs."""
    if not chunks:
        return []
    embeddings = embed_texts([c.text for c in chunks])
    return list(zip(chunks, embeddings, strict=True))
