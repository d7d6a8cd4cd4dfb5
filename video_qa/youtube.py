"""Helpers for finding YouTube videos referenced in free text."""

from __future__ import annotations

import re

_URL_RE = re.compile(
    r"(https?://(?:www\.|m\.)?(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)[^\s]+)"
)
_VIDEO_ID_RE = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#\s]+)")
_ANY_URL_RE = re.compile(r"https?://\S+")


def extract_youtube_url(text: str) -> str | None:
    """Return the first YouTube watch/short/embed URL in *text*, if any."""
    match = _URL_RE.search(text)
    return match.group(1) if match else None


def video_id_from_url(url: str) -> str | None:
    """Return the video ID of a YouTube URL, e.g. ``dQw4w9WgXcQ``."""
    match = _VIDEO_ID_RE.search(url)
    return match.group(1) if match else None


def strip_urls(text: str) -> str:
    """Remove URLs so that digits inside them are not read as times."""
    return " ".join(_ANY_URL_RE.sub(" ", text).split())
