"""Digest and key helpers for timeline summarization."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from .models import Event, format_timestamp, utc_now

SUMMARY_KEY_PREFIX = "summary:"
SUMMARY_KEY_FORMAT = "%Y%m%dT%H%M%S"


def build_digest(events: Iterable[Event], *, limit: int = 20) -> str:
    """One ``<timestamp>: <type>`` line per event, for at most ``limit`` events."""

    lines = []
    for i, event in enumerate(events):
        if i >= limit:
            break
        lines.append(event.digest_line())
    return "\n".join(lines) + "\n" if lines else ""


def summary_key(now: Optional[datetime] = None) -> str:
    ts = (now or utc_now()).astimezone(timezone.utc)
    return SUMMARY_KEY_PREFIX + ts.strftime(SUMMARY_KEY_FORMAT)


def reflection_report(now: Optional[datetime] = None) -> str:
    return f"[Brain] Self-reflection complete at {format_timestamp(now or utc_now())}"


__all__ = [
    "SUMMARY_KEY_FORMAT",
    "SUMMARY_KEY_PREFIX",
    "build_digest",
    "reflection_report",
    "summary_key",
]
