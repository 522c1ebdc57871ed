"""Utility functions for formatting Discord messages."""

from __future__ import annotations

from functools import cache


@cache
def format_duration(seconds: int | float | None) -> str | None:
    """Render a length in seconds as ``M:SS`` or ``H:MM:SS``; None stays None."""
    if seconds is None:
        return None

    total_seconds = max(int(seconds), 0)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


@cache
def truncate(text: str, max_length: int = 90) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"
