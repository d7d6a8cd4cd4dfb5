"""Query endpoint: answer a question about a YouTube video."""

from __future__ import annotations

from functools import lru_cache

from anthropic import APIStatusError
from fastapi import APIRouter, HTTPException

from video_qa.agent import VideoQAAgent, build_agent
from video_qa.api.models import QueryRequest, QueryResponse

router = APIRouter()


@lru_cache(maxsize=1)
def get_agent() -> VideoQAAgent:
    return build_agent()


@router.post("/api/query", response_model=QueryResponse)
async def query(request: QueryRequest) -> QueryResponse:
    """Answer a question, routing it by intent.

    Questions with a YouTube link are answered from that video's transcript
    (time range, point in time, topic, sentiment, metadata or a full
    summary); anything else goes to plain conversation.
    """
    try:
        reply = get_agent().answer(request.question)
    except APIStatusError as exc:
        # Claude API overloaded (529) or other upstream error: return 503 so the
        # client receives a proper JSON response.
        raise HTTPException(status_code=503, detail=f"LLM unavailable: {exc.message}") from exc

    return QueryResponse(
        answer=reply.answer,
        intent=reply.intent,
        video_id=reply.video_id,
        chunks_used=reply.chunks_used,
    )
