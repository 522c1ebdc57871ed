"""
Stop Playback Command

Command and handler for stopping playback and leaving the voice channel.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.messages import DiscordUIMessages

from .base import CommandResult, GuildCommand

if TYPE_CHECKING:
    from ...domain.music.repository import QueueRegistry
    from ..services.playback_driver import PlaybackDriver


class StopCommand(GuildCommand):
    """Command to stop playback, drop the queue and leave voice."""


class StopPlaybackHandler:
    def __init__(self, *, registry: QueueRegistry, driver: PlaybackDriver) -> None:
        self._registry = registry
        self._driver = driver

    async def handle(self, command: StopCommand) -> CommandResult:
        queue = self._registry.get(command.guild_id)
        if queue is None:
            return CommandResult.nothing_playing()

        # The reply is the only notice; the "queue ended" message is not sent.
        await self._driver.teardown(queue)
        return CommandResult.success(DiscordUIMessages.ACTION_STOPPED)
