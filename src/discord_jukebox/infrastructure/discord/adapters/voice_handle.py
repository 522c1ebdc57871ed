"""VoiceHandle backed by a discord.py voice client."""

from __future__ import annotations

import discord

from discord_jukebox.application.interfaces.voice_adapter import VoiceHandle


class DiscordVoiceHandle(VoiceHandle):
    def __init__(self, client: discord.VoiceClient) -> None:
        self._client = client
        self._guild_id = client.guild.id

    @property
    def client(self) -> discord.VoiceClient:
        return self._client

    @property
    def guild_id(self) -> int:
        return self._guild_id

    @property
    def channel_id(self) -> int | None:
        channel = self._client.channel
        if channel is None or not self._client.is_connected():
            return None
        return channel.id

    @property
    def is_connected(self) -> bool:
        return self._client.is_connected()

    def __repr__(self) -> str:
        return f"DiscordVoiceHandle(guild_id={self._guild_id}, channel_id={self.channel_id})"
