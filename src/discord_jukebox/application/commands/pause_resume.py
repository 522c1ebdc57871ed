"""Commands and handlers for pausing and resuming playback."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.messages import DiscordUIMessages, LogTemplates

from .base import CommandResult, GuildCommand

if TYPE_CHECKING:
    from ...domain.music.repository import QueueRegistry

logger = logging.getLogger(__name__)


class PauseCommand(GuildCommand):
    """Command to pause the current song."""


class ResumeCommand(GuildCommand):
    """Command to resume a paused song."""


class PausePlaybackHandler:
    def __init__(self, *, registry: QueueRegistry) -> None:
        self._registry = registry

    async def handle(self, command: PauseCommand) -> CommandResult:
        queue = self._registry.get(command.guild_id)
        if queue is None:
            return CommandResult.nothing_playing()

        # Pausing an already paused player is a no-op but still acknowledged.
        if queue.player.pause():
            logger.info(LogTemplates.PLAYBACK_PAUSED, command.guild_id)
        return CommandResult.success(DiscordUIMessages.ACTION_PAUSED)


class ResumePlaybackHandler:
    def __init__(self, *, registry: QueueRegistry) -> None:
        self._registry = registry

    async def handle(self, command: ResumeCommand) -> CommandResult:
        queue = self._registry.get(command.guild_id)
        if queue is None:
            return CommandResult.nothing_playing()

        if queue.player.unpause():
            logger.info(LogTemplates.PLAYBACK_RESUMED, command.guild_id)
        return CommandResult.success(DiscordUIMessages.ACTION_RESUMED)
