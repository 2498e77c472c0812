"""Tick to duration-string conversion."""

from __future__ import annotations

import re

from chaptercreator.models.config import TICKS_PER_SECOND

TICKS_PER_CENTISECOND = TICKS_PER_SECOND // 100

_TIME_RE = re.compile(r"^(\d+):([0-5]\d):([0-5]\d)(?:\.(\d+))?$")


def format_ticks(ticks: int) -> str:
    """Format a tick count as ``HH:MM:SS.cc``.

    Hours do not wrap at 24; centiseconds are truncated.
    """
    if ticks < 0:
        raise ValueError(f"Tick count must be non-negative, got {ticks}")

    centis = ticks // TICKS_PER_CENTISECOND
    total_seconds, cc = divmod(centis, 100)
    total_minutes, ss = divmod(total_seconds, 60)
    hh, mm = divmod(total_minutes, 60)
    return f"{hh:02d}:{mm:02d}:{ss:02d}.{cc:02d}"


def parse_time(text: str) -> int:
    """Parse ``HH:MM:SS[.fraction]`` back into ticks."""
    match = _TIME_RE.match(text.strip())
    if not match:
        raise ValueError(f"Invalid chapter time: {text!r}")

    hh, mm, ss, fraction = match.groups()
    ticks = (int(hh) * 3600 + int(mm) * 60 + int(ss)) * TICKS_PER_SECOND
    if fraction:
        # Fractions beyond 100ns resolution are dropped
        ticks += int(fraction[:7].ljust(7, "0"))
    return ticks
