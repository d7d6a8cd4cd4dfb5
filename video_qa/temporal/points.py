"""Extract a single-point time reference ("5th minute", "at 2:30", "last minute")."""

from __future__ import annotations

import re

from video_qa.temporal.models import Instant, MinuteMark, RelativeLastMinute

_NTH_MINUTE_RE = re.compile(r"\b(\d+)(?:st|nd|rd|th)?\s+minute\b", re.IGNORECASE)
_MINUTE_N_RE = re.compile(r"\bminute\s+(\d+)\b", re.IGNORECASE)
# "at 2:30" is minutes:seconds; "at 1:02:03" is hours:minutes:seconds
_AT_CLOCK_RE = re.compile(r"\bat\s+(\d+):(\d{2})(?::(\d{2}))?(?!\d)", re.IGNORECASE)
_LAST_MINUTE_RE = re.compile(r"\blast\s+minute\b", re.IGNORECASE)


def extract_point(utterance: str) -> MinuteMark | Instant | RelativeLastMinute | None:
    """Return the point reference in *utterance*, or None.

    Checked in order: an "Nth minute" phrase, an "at M:SS" clock reference,
    then the literal "last minute". Only one shape is ever returned.
    """
    minute = _NTH_MINUTE_RE.search(utterance) or _MINUTE_N_RE.search(utterance)
    if minute:
        return MinuteMark(int(minute.group(1)))

    clock = _AT_CLOCK_RE.search(utterance)
    if clock:
        first, second, third = clock.group(1), clock.group(2), clock.group(3)
        if third is None:
            return Instant(int(first) * 60 + int(second))
        return Instant(int(first) * 3600 + int(second) * 60 + int(third))

    if _LAST_MINUTE_RE.search(utterance):
        return RelativeLastMinute()
    return None
