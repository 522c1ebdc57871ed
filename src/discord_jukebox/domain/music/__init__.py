"""
Music Bounded Context

Domain logic for songs, per-guild queues and loop semantics.
"""

from discord_jukebox.domain.music.entities import GuildQueue, Song
from discord_jukebox.domain.music.repository import QueueRegistry
from discord_jukebox.domain.music.value_objects import LoopMode, VideoId

__all__ = [
    # Entities
    "Song",
    "GuildQueue",
    # Value Objects
    "LoopMode",
    "VideoId",
    # Registry
    "QueueRegistry",
]
