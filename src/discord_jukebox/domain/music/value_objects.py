"""Immutable value objects for the music bounded context."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Final

YOUTUBE_ID_PATTERNS: Final[list[re.Pattern[str]]] = [
    re.compile(r"youtube\.com/watch\?(?:[^#]*&)?v=([a-zA-Z0-9_-]{11})"),
    re.compile(r"youtu\.be/([a-zA-Z0-9_-]{11})"),
    re.compile(r"youtube\.com/(?:embed|shorts)/([a-zA-Z0-9_-]{11})"),
]

THUMBNAIL_URL_TEMPLATE: Final[str] = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


@dataclass(frozen=True)
class VideoId:
    """YouTube video ID extracted from a song locator."""

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_locator(cls, locator: str) -> VideoId | None:
        """Extract the video ID from a watch, short, embed or youtu.be link."""
        for pattern in YOUTUBE_ID_PATTERNS:
            match = pattern.search(locator)
            if match:
                return cls(match.group(1))
        return None

    @property
    def thumbnail_url(self) -> str:
        return THUMBNAIL_URL_TEMPLATE.format(video_id=self.value)


class LoopMode(Enum):
    """Loop mode settings for queue playback.

    The values double as the slash-command choice values.
    """

    OFF = "off"
    SONG = "song"  # Replay the current song
    QUEUE = "queue"  # Rotate through the whole queue

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: str) -> LoopMode:
        """Parse a case-insensitive mode name, raising ValueError if unknown."""
        return cls(value.strip().lower())
