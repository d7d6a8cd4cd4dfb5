"""Tests for API endpoints (no external API keys required)."""

from unittest.mock import MagicMock, patch

import httpx
from anthropic import APIStatusError
from fastapi.testclient import TestClient

from video_qa.agent import AgentReply
from video_qa.api.main import app
from video_qa.api.routes.ingest import MAX_VIDEOS_PER_REQUEST
from video_qa.retrieval.router import Intent

client = TestClient(app)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_query_validation():
    """Test that query endpoint validates input."""
    response = client.post("/api/query", json={})
    assert response.status_code == 422  # missing required field


def test_query_returns_agent_reply():
    agent = MagicMock()
    agent.answer.return_value = AgentReply(
        answer="It is about robots.", intent=Intent.FULL_SUMMARY, video_id="abc", chunks_used=3
    )

    with patch("video_qa.api.routes.query.get_agent", return_value=agent):
        response = client.post(
            "/api/query", json={"question": "summarize https://youtu.be/abc"}
        )

    assert response.status_code == 200
    assert response.json() == {
        "answer": "It is about robots.",
        "intent": "full_summary",
        "video_id": "abc",
        "chunks_used": 3,
    }
    agent.answer.assert_called_once_with("summarize https://youtu.be/abc")


def test_query_passthrough_has_no_video():
    agent = MagicMock()
    agent.answer.return_value = AgentReply(answer="Hi!", intent=Intent.PASSTHROUGH)

    with patch("video_qa.api.routes.query.get_agent", return_value=agent):
        response = client.post("/api/query", json={"question": "hello"})

    body = response.json()
    assert body["intent"] == "passthrough"
    assert body["video_id"] is None
    assert body["chunks_used"] == 0


def test_query_llm_overloaded_returns_503():
    """An upstream Claude error becomes a 503 with a JSON body, not a 500."""
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    error = APIStatusError(
        "Overloaded", response=httpx.Response(529, request=request), body=None
    )
    agent = MagicMock()
    agent.answer.side_effect = error

    with patch("video_qa.api.routes.query.get_agent", return_value=agent):
        response = client.post("/api/query", json={"question": "summarize"})

    assert response.status_code == 503
    assert "LLM unavailable" in response.json()["detail"]


# --- Ingest webhook ---


def test_ingest_single_video():
    with patch("video_qa.api.routes.ingest.ingest_video", return_value=4) as mock_ingest:
        response = client.post(
            "/api/videos/ingest", json={"video_id": "abc", "transcript": "hello"}
        )

    assert response.status_code == 200
    assert response.json() == {
        "videos_ingested": 1,
        "chunks_stored": 4,
        "skipped": [],
        "errors": [],
    }
    mock_ingest.assert_called_once_with({"video_id": "abc", "transcript": "hello"})


def test_ingest_batch_reports_each_video():
    def fake_ingest(payload):
        if payload["video_id"] == "bad":
            raise ValueError("broken payload")
        if payload["video_id"] == "silent":
            return None
        return 2

    videos = [{"video_id": "ok1"}, {"video_id": "silent"}, {"video_id": "bad"}, {"video_id": "ok2"}]
    with patch("video_qa.api.routes.ingest.ingest_video", side_effect=fake_ingest):
        response = client.post("/api/videos/ingest", json=videos)

    assert response.status_code == 200
    body = response.json()
    assert body["videos_ingested"] == 2
    assert body["chunks_stored"] == 4
    assert body["skipped"] == ["silent"]
    assert body["errors"] == ["bad: broken payload"]


def test_ingest_labels_by_url_when_id_missing():
    with patch("video_qa.api.routes.ingest.ingest_video", return_value=None):
        response = client.post("/api/videos/ingest", json=[{"url": "https://youtu.be/xyz"}])
    assert response.json()["skipped"] == ["https://youtu.be/xyz"]


def test_ingest_too_many_videos():
    videos = [{"video_id": str(i)} for i in range(MAX_VIDEOS_PER_REQUEST + 1)]
    with patch("video_qa.api.routes.ingest.ingest_video") as mock_ingest:
        response = client.post("/api/videos/ingest", json=videos)
    assert response.status_code == 413
    mock_ingest.assert_not_called()


def test_ingest_rejects_non_json_object():
    response = client.post("/api/videos/ingest", json="just a string")
    assert response.status_code == 422
