"""Discord voice adapter implementing VoiceAdapter for sessions and players."""

from __future__ import annotations

import asyncio
import logging

import discord

from discord_jukebox.application.interfaces.voice_adapter import (
    AudioPlayer,
    VoiceAdapter,
    VoiceHandle,
)
from discord_jukebox.config.settings import AudioSettings, ResolverSettings
from discord_jukebox.domain.shared.exceptions import VoiceConnectionError
from discord_jukebox.domain.shared.messages import LogTemplates
from discord_jukebox.infrastructure.audio.ffmpeg_player import FFmpegAudioPlayer, FFmpegConfig

from .voice_handle import DiscordVoiceHandle

logger = logging.getLogger(__name__)

VoiceChannelLike = discord.VoiceChannel | discord.StageChannel


class DiscordVoiceAdapter(VoiceAdapter):
    def __init__(
        self,
        bot: discord.Client,
        settings: AudioSettings | None = None,
        resolver_settings: ResolverSettings | None = None,
    ) -> None:
        self._bot = bot
        self._settings = settings or AudioSettings()
        self._ffmpeg_config = FFmpegConfig.from_settings(self._settings, resolver_settings)

    def _get_channel(self, guild_id: int, channel_id: int) -> VoiceChannelLike | None:
        guild = self._bot.get_guild(guild_id)
        if guild is None:
            return None
        channel = guild.get_channel(channel_id)
        return channel if isinstance(channel, VoiceChannelLike) else None

    def can_connect(self, guild_id: int, channel_id: int) -> bool:
        channel = self._get_channel(guild_id, channel_id)
        if channel is None:
            return False
        permissions = channel.permissions_for(channel.guild.me)
        return permissions.connect and permissions.speak

    async def join(self, guild_id: int, channel_id: int) -> VoiceHandle:
        channel = self._get_channel(guild_id, channel_id)
        if channel is None:
            raise VoiceConnectionError(guild_id, channel_id)

        # A session left over from a previous queue would make connect() fail.
        stale = channel.guild.voice_client
        if stale is not None:
            await self._disconnect(guild_id, stale)

        try:
            async with asyncio.timeout(self._settings.connect_timeout_s):
                client = await channel.connect(self_deaf=True)
        except TimeoutError as e:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel_id)
            raise VoiceConnectionError(guild_id, channel_id, "Timed out joining voice") from e
        except discord.Forbidden as e:
            logger.error(LogTemplates.VOICE_NO_PERMISSION, channel_id)
            raise VoiceConnectionError(guild_id, channel_id, str(e)) from e
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            raise VoiceConnectionError(guild_id, channel_id, str(e)) from e

        await self._ensure_self_deaf(channel)
        logger.info(LogTemplates.VOICE_CONNECTED, channel.name, channel.guild.name)
        return DiscordVoiceHandle(client)

    async def _ensure_self_deaf(self, channel: VoiceChannelLike) -> None:
        try:
            await channel.guild.change_voice_state(channel=channel, self_deaf=True)
        except (discord.HTTPException, discord.ClientException) as exc:
            logger.debug(LogTemplates.VOICE_SELF_DEAFEN_FAILED, channel.guild.id, exc)

    async def release(self, handle: VoiceHandle) -> None:
        if not isinstance(handle, DiscordVoiceHandle):
            return
        await self._disconnect(handle.guild_id, handle.client)

    async def _disconnect(self, guild_id: int, client: discord.VoiceProtocol) -> None:
        try:
            await client.disconnect(force=True)
            logger.info(LogTemplates.VOICE_DISCONNECTED, guild_id)
        except Exception as exc:
            logger.debug(LogTemplates.VOICE_RELEASE_ERROR, guild_id, exc)

    def create_player(self, guild_id: int) -> AudioPlayer:
        return FFmpegAudioPlayer(guild_id, self._ffmpeg_config)
