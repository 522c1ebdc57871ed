"""Interaction guard functions for Discord cogs."""

from discord_jukebox.infrastructure.discord.guards.voice_guards import (
    get_member,
    send_ephemeral,
    voice_channel_id,
)

__all__ = [
    "get_member",
    "send_ephemeral",
    "voice_channel_id",
]
