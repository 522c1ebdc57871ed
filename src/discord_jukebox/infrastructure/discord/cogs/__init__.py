"""Discord cogs - command handlers."""

from discord_jukebox.infrastructure.discord.cogs.event_cog import EventCog
from discord_jukebox.infrastructure.discord.cogs.music_cog import MusicCog

__all__ = [
    "MusicCog",
    "EventCog",
]
