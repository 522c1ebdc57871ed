"""Slash-command music cog delegating to the command dispatcher."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands
from pydantic import ValidationError

from discord_jukebox.application.commands.pause_resume import PauseCommand, ResumeCommand
from discord_jukebox.application.commands.play_song import PlayCommand
from discord_jukebox.application.commands.set_loop_mode import LoopCommand
from discord_jukebox.application.commands.skip_song import SkipCommand
from discord_jukebox.application.commands.stop_playback import StopCommand
from discord_jukebox.application.queries.show_queue import ShowQueueQuery
from discord_jukebox.domain.music.value_objects import LoopMode
from discord_jukebox.domain.shared.messages import DiscordUIMessages, ErrorMessages

from ..adapters.notification_sink import TextChannelSink
from ..embeds import build_queue_embed
from ..guards.voice_guards import get_member, send_ephemeral, voice_channel_id

if TYPE_CHECKING:
    from ....application.commands.base import CommandResult
    from ....application.commands.dispatcher import MusicCommand
    from ....config.container import Container

logger = logging.getLogger(__name__)

LOOP_CHOICES = [app_commands.Choice(name=mode.label, value=mode.value) for mode in LoopMode]


class MusicCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def _reply(self, interaction: discord.Interaction, result: CommandResult) -> None:
        """Send a summary as the queue embed, anything else as plain text.

        Failures are sent ephemerally. After a deferral the first followup
        replaces the thinking message, so it keeps the deferral's visibility.
        """
        if result.summary is not None:
            embed = build_queue_embed(result.summary)
            if interaction.response.is_done():
                await interaction.followup.send(embed=embed)
            else:
                await interaction.response.send_message(embed=embed)
            return

        ephemeral = not result.is_success
        if interaction.response.is_done():
            await interaction.followup.send(result.message, ephemeral=ephemeral)
        else:
            await interaction.response.send_message(result.message, ephemeral=ephemeral)

    async def _run_guild_command(
        self, interaction: discord.Interaction, command_type: type[MusicCommand]
    ) -> None:
        if interaction.guild is None:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_SERVER_ONLY)
            return

        command = command_type(guild_id=interaction.guild.id, user_id=interaction.user.id)
        result = await self.container.dispatcher.dispatch(command)
        await self._reply(interaction, result)

    @app_commands.command(name="play", description="Play a song from YouTube or Spotify")
    @app_commands.describe(query="YouTube URL, Spotify URL, or search term")
    async def play(self, interaction: discord.Interaction, query: str) -> None:
        # Resolving and joining voice can exceed the 3-second interaction deadline.
        await interaction.response.defer()

        member = await get_member(interaction)
        if member is None or interaction.guild is None:
            return

        channel = interaction.channel
        if not isinstance(channel, discord.abc.Messageable):
            await send_ephemeral(interaction, DiscordUIMessages.STATE_SERVER_ONLY)
            return

        try:
            command = PlayCommand(
                guild_id=interaction.guild.id,
                user_id=member.id,
                query=query,
                voice_channel_id=voice_channel_id(member),
                notify_sink=TextChannelSink(channel),
            )
        except ValidationError:
            await send_ephemeral(interaction, DiscordUIMessages.ERROR_NO_RESULTS)
            return

        result = await self.container.dispatcher.dispatch(command)
        await self._reply(interaction, result)

    @app_commands.command(name="skip", description="Skip the current song")
    async def skip(self, interaction: discord.Interaction) -> None:
        await self._run_guild_command(interaction, SkipCommand)

    @app_commands.command(name="pause", description="Pause the song")
    async def pause(self, interaction: discord.Interaction) -> None:
        await self._run_guild_command(interaction, PauseCommand)

    @app_commands.command(name="resume", description="Resume the song")
    async def resume(self, interaction: discord.Interaction) -> None:
        await self._run_guild_command(interaction, ResumeCommand)

    @app_commands.command(name="stop", description="Stop music and leave")
    async def stop(self, interaction: discord.Interaction) -> None:
        await self._run_guild_command(interaction, StopCommand)

    @app_commands.command(name="loop", description="Set loop mode")
    @app_commands.describe(mode="off, song, queue")
    @app_commands.choices(mode=LOOP_CHOICES)
    async def loop(self, interaction: discord.Interaction, mode: app_commands.Choice[str]) -> None:
        if interaction.guild is None:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_SERVER_ONLY)
            return

        command = LoopCommand(
            guild_id=interaction.guild.id,
            user_id=interaction.user.id,
            mode=LoopMode.parse(mode.value),
        )
        result = await self.container.dispatcher.dispatch(command)
        await self._reply(interaction, result)

    @app_commands.command(name="queue", description="Show current queue")
    async def queue(self, interaction: discord.Interaction) -> None:
        await self._run_guild_command(interaction, ShowQueueQuery)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(MusicCog(bot, container))
