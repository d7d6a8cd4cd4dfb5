"""Tests for Settings and ResolverConfig."""

from __future__ import annotations

import dataclasses

import pytest

from video_qa.config import Settings, get_settings
from video_qa.pipeline_config import ResolverConfig

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("TRANSCRIPT_CHUNK_LIMIT", "CHUNK_SIZE", "CHUNK_OVERLAP", "LLM_MODEL"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.transcript_chunk_limit == 40
        assert s.chunk_size == 180
        assert s.chunk_overlap == 35
        assert s.analyzer_temperature == 0.2
        assert s.summarizer_temperature == 0.3
        assert s.default_video_duration_seconds == 10800

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRANSCRIPT_CHUNK_LIMIT", "12")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.transcript_chunk_limit == 12

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


# ---------------------------------------------------------------------------
# ResolverConfig
# ---------------------------------------------------------------------------


class TestResolverConfig:
    def test_defaults(self) -> None:
        config = ResolverConfig()
        assert config.default_duration_seconds == 10800
        assert config.fallback_video_minutes == 10
        assert config.point_window_seconds == 120
        assert config.topic_match_count == 4

    def test_frozen(self) -> None:
        config = ResolverConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.topic_match_count = 10  # type: ignore[misc]

    def test_from_settings(self) -> None:
        s = Settings(
            _env_file=None,  # type: ignore[call-arg]
            default_video_duration_seconds=3600,
            topic_match_count=6,
        )
        config = ResolverConfig.from_settings(s)
        assert config.default_duration_seconds == 3600
        assert config.topic_match_count == 6
        assert config.fallback_video_minutes == 10
