"""Parse a single temporal phrase into a second offset.

Rules are tried in order and the first one that matches wins. The order
matters because the families overlap ("last 5 minutes" also contains
"5 minutes").
"""

from __future__ import annotations

import re
from collections.abc import Callable

UNIT_SECONDS: dict[str, int] = {"hour": 3600, "minute": 60, "second": 1}

_UNIT = r"(minute|hour|second)s?\b"

# "10th minute", "5 minute" -- but not "first/last/after/before 5 minute(s)"
_NTH_MINUTE_RE = re.compile(
    r"(?<!first )(?<!last )(?<!after )(?<!before )\b(\d+)(?:st|nd|rd|th)?\s+minute\b"
)
_FIRST_RE = re.compile(rf"\bfirst\s+(\d+)\s+{_UNIT}")
_LAST_RE = re.compile(rf"\blast\s+(\d+)\s+{_UNIT}")
_AFTER_RE = re.compile(rf"\bafter\s+(\d+)\s+{_UNIT}")
_BEFORE_RE = re.compile(rf"\bbefore\s+(\d+)\s+{_UNIT}")

_HOURS_RE = re.compile(r"(\d+)\s*h(?:ours?|rs?)?\b")
_MINUTES_RE = re.compile(r"(\d+)\s*m(?:in(?:ute)?s?)?\b")
_SECONDS_RE = re.compile(r"(\d+)\s*sec(?:ond)?s?\b")
# A bare "s" only counts next to an h/m component; "the 1990s" is not a time
_BARE_SECONDS_RE = re.compile(r"(\d+)\s*s\b")

_COLON_RE = re.compile(r"(\d+):(\d{2})(?::(\d{2}))?")

_HALF_HOUR_RE = re.compile(r"\bhalf an hour\b")
_QUARTER_RE = re.compile(r"\bquarter\b")
_MIDDLE_RE = re.compile(r"\b(?:midway|middle)\b")
_BEGINNING_RE = re.compile(r"\b(?:beginning|start)\b")
_END_RE = re.compile(r"\bend\b")

Matcher = Callable[[str, int], int | None]


def unit_seconds(count: str | int, unit: str) -> int:
    """Return ``count`` units in seconds (``unit`` is hour, minute or second)."""
    return int(count) * UNIT_SECONDS[unit]


def _nth_minute(phrase: str, duration: int) -> int | None:
    match = _NTH_MINUTE_RE.search(phrase)
    return int(match.group(1)) * 60 if match else None


def _first_window(phrase: str, duration: int) -> int | None:
    # Only the start of the window is defined here, whatever N and the unit
    # are. extract_time_range computes the end of "first N <unit>" itself.
    return 0 if _FIRST_RE.search(phrase) else None


def _last_window(phrase: str, duration: int) -> int | None:
    match = _LAST_RE.search(phrase)
    if not match:
        return None
    return max(0, duration - unit_seconds(match.group(1), match.group(2)))


def _after(phrase: str, duration: int) -> int | None:
    match = _AFTER_RE.search(phrase)
    return unit_seconds(match.group(1), match.group(2)) if match else None


def _before(phrase: str, duration: int) -> int | None:
    match = _BEFORE_RE.search(phrase)
    return unit_seconds(match.group(1), match.group(2)) if match else None


def _composite(phrase: str, duration: int) -> int | None:
    """``2h 30m``, ``2hr 30min``, ``90 minutes``, ``1m 45s`` -- components are optional."""
    hours = _HOURS_RE.search(phrase)
    minutes = _MINUTES_RE.search(phrase)
    seconds = _SECONDS_RE.search(phrase)
    if seconds is None and (hours or minutes):
        seconds = _BARE_SECONDS_RE.search(phrase)
    if not (hours or minutes or seconds):
        return None
    total = 0
    if hours:
        total += int(hours.group(1)) * 3600
    if minutes:
        total += int(minutes.group(1)) * 60
    if seconds:
        total += int(seconds.group(1))
    return total


def _colon(phrase: str, duration: int) -> int | None:
    """``H:MM`` or ``H:MM:SS``."""
    match = _COLON_RE.search(phrase)
    if not match:
        return None
    hours, minutes, seconds = match.group(1), match.group(2), match.group(3)
    return int(hours) * 3600 + int(minutes) * 60 + int(seconds or 0)


def _literal(phrase: str, duration: int) -> int | None:
    if _HALF_HOUR_RE.search(phrase):
        return 30 * 60
    if _QUARTER_RE.search(phrase):
        return 15 * 60
    if _MIDDLE_RE.search(phrase):
        return duration // 2
    if _BEGINNING_RE.search(phrase):
        return 0
    if _END_RE.search(phrase):
        return duration
    return None


_RULES: list[tuple[str, Matcher]] = [
    ("nth_minute", _nth_minute),
    ("first", _first_window),
    ("last", _last_window),
    ("after", _after),
    ("before", _before),
    ("composite", _composite),
    ("colon", _colon),
    ("literal", _literal),
]


def match_time_expression(phrase: str, duration_seconds: int) -> int | None:
    """Return the offset in seconds for *phrase*, or None if no rule matches.

    Args:
        phrase: A temporal phrase such as ``"2hr 30min"`` or ``"1:30:00"``.
        duration_seconds: Known or assumed video length, used by the
            ``last``/``midway``/``end`` rules.
    """
    lowered = phrase.lower()
    for _name, matcher in _RULES:
        value = matcher(lowered, duration_seconds)
        if value is not None:
            return max(0, value)
    return None


def parse_time_expression(phrase: str, duration_seconds: int) -> int:
    """Return the offset in seconds for *phrase*, 0 when nothing matches.

    Note that ``"first N minutes"`` always parses to 0: it names the start of
    a window, not a point.
    """
    value = match_time_expression(phrase, duration_seconds)
    return 0 if value is None else value


def duration_from_metadata(value: object, default_seconds: int) -> int:
    """Convert a metadata duration (seconds or a time string) to seconds.

    Missing, zero or unparseable values yield *default_seconds*.
    """
    if isinstance(value, bool):
        return default_seconds
    if isinstance(value, int | float):
        return int(value) if value > 0 else default_seconds
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return int(text) or default_seconds
        parsed = match_time_expression(text, default_seconds)
        if parsed:
            return parsed
    return default_seconds
