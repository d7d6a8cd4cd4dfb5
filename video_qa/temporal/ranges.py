"""Extract a time window from a whole utterance."""

from __future__ import annotations

import re
from collections.abc import Callable

from video_qa.temporal.expressions import match_time_expression, unit_seconds
from video_qa.temporal.models import Range

_FROM_TO_RE = re.compile(r"\bfrom\s+(.+?)\s+to\s+(.+)", re.IGNORECASE)
_BETWEEN_RE = re.compile(r"\bbetween\s+(.+?)\s+and\s+(.+)", re.IGNORECASE)
_MINUTES_TO_RE = re.compile(r"\bminutes?\s+(\d+)\s+to\s+(\d+)\b", re.IGNORECASE)
_BARE_NUMBER_RE = re.compile(r"^\s*(\d+)\s*$")
_UNIT_WORD_RE = re.compile(
    r"\d+\s*(hours?|hrs?|h|minutes?|mins?|m|seconds?|secs?)\b", re.IGNORECASE
)

_FIRST_RE = re.compile(r"\bfirst\s+(\d+)\s+(minute|hour|second)s?\b", re.IGNORECASE)
_LAST_RE = re.compile(r"\blast\s+(\d+)\s+(minute|hour|second)s?\b", re.IGNORECASE)
_AFTER_RE = re.compile(r"\bafter\s+(.+)", re.IGNORECASE)
_BEFORE_RE = re.compile(r"\bbefore\s+(.+)", re.IGNORECASE)
_AROUND_RE = re.compile(r"\b(?:around|about)\s+(.+)", re.IGNORECASE)
_MIDDLE_RE = re.compile(r"\b(?:midway|middle)\b", re.IGNORECASE)

RangeMatcher = Callable[[str, int, int], Range | None]


def _ordered(start: int, end: int) -> Range:
    return Range(start, end) if start <= end else Range(end, start)


def _endpoint(phrase: str, other: str, duration: int) -> int | None:
    """Resolve one end of an explicit range.

    A bare number borrows the unit of the other end, so "between 10 and 20
    minutes" reads as 10 minutes to 20 minutes.
    """
    bare = _BARE_NUMBER_RE.match(phrase)
    if bare:
        unit = _UNIT_WORD_RE.search(other)
        if unit:
            return match_time_expression(f"{bare.group(1)} {unit.group(1)}", duration)
    return match_time_expression(phrase, duration)


def _explicit(text: str, duration: int, window: int) -> Range | None:
    """``from A to B``, ``between A and B``, ``minutes 10 to 20``."""
    minutes = _MINUTES_TO_RE.search(text)
    if minutes:
        return _ordered(int(minutes.group(1)) * 60, int(minutes.group(2)) * 60)

    match = _FROM_TO_RE.search(text) or _BETWEEN_RE.search(text)
    if not match:
        return None
    start = _endpoint(match.group(1), match.group(2), duration)
    end = _endpoint(match.group(2), match.group(1), duration)
    if start is None or end is None:
        return None
    return _ordered(start, end)


def _first(text: str, duration: int, window: int) -> Range | None:
    match = _FIRST_RE.search(text)
    if not match:
        return None
    return Range(0, unit_seconds(match.group(1), match.group(2).lower()))


def _last(text: str, duration: int, window: int) -> Range | None:
    match = _LAST_RE.search(text)
    if not match:
        return None
    start = duration - unit_seconds(match.group(1), match.group(2).lower())
    return Range(max(0, start), duration)


def _after(text: str, duration: int, window: int) -> Range | None:
    match = _AFTER_RE.search(text)
    if not match:
        return None
    start = match_time_expression(match.group(1), duration)
    if start is None:
        return None
    return _ordered(start, duration)


def _before(text: str, duration: int, window: int) -> Range | None:
    match = _BEFORE_RE.search(text)
    if not match:
        return None
    end = match_time_expression(match.group(1), duration)
    if end is None:
        return None
    return Range(0, end)


def _around(text: str, duration: int, window: int) -> Range | None:
    """A window centred on ``around X``, ``about X`` or the middle of the video."""
    match = _AROUND_RE.search(text)
    center = match_time_expression(match.group(1), duration) if match else None
    if center is None:
        if not _MIDDLE_RE.search(text):
            return None
        center = duration // 2
    half = window // 2
    return Range(max(0, center - half), center + half)


_FAMILIES: list[tuple[str, RangeMatcher]] = [
    ("explicit", _explicit),
    ("first", _first),
    ("last", _last),
    ("after", _after),
    ("before", _before),
    ("around", _around),
]


def extract_time_range(
    utterance: str,
    duration_seconds: int,
    window_seconds: int = 120,
) -> Range | None:
    """Scan *utterance* for a range-forming phrase.

    Families are tried in order (explicit range, first N, last N, after X,
    before Y, around X) and the first match is returned. A phrase whose
    anchor is not a time expression ("tell me about pricing") is a miss for
    its family.

    Args:
        utterance: The user's question.
        duration_seconds: Known or assumed video length.
        window_seconds: Width of the window built around a single point.

    Returns:
        The resolved :class:`Range`, or None when no family matches.
    """
    for _name, family in _FAMILIES:
        found = family(utterance, duration_seconds, window_seconds)
        if found is not None:
            return found
    return None
