"""Resolver configuration: fixed assumptions used when timing metadata is missing."""

from __future__ import annotations

from dataclasses import dataclass

from video_qa.config import Settings


@dataclass(frozen=True)
class ResolverConfig:
    """Immutable configuration for the intent resolver.

    ``default_duration_seconds`` stands in for an unknown video length (3h).
    ``fallback_video_minutes`` is the video length assumed by the minute and
    seconds selectors when chunks carry no timing metadata.
    ``point_window_seconds`` is the width of the window built around a single
    point ("around 10 minutes", "midway").
    """

    default_duration_seconds: int = 10800
    fallback_video_minutes: int = 10
    point_window_seconds: int = 120
    topic_match_count: int = 4

    @classmethod
    def from_settings(cls, settings: Settings) -> ResolverConfig:
        return cls(
            default_duration_seconds=settings.default_video_duration_seconds,
            topic_match_count=settings.topic_match_count,
        )
