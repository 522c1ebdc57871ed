"""
Skip Song Command

Command and handler for skipping the current song.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.messages import DiscordUIMessages

from .base import CommandResult, CommandStatus, GuildCommand

if TYPE_CHECKING:
    from ...domain.music.repository import QueueRegistry
    from ..services.playback_driver import PlaybackDriver


class SkipCommand(GuildCommand):
    """Command to skip the song that is currently playing."""


class SkipSongHandler:
    """Handler for SkipCommand.

    The current song is discarded whatever the loop mode; the player's idle
    signal then advances the queue.
    """

    def __init__(self, *, registry: QueueRegistry, driver: PlaybackDriver) -> None:
        self._registry = registry
        self._driver = driver

    async def handle(self, command: SkipCommand) -> CommandResult:
        queue = self._registry.get(command.guild_id)
        if queue is None:
            return CommandResult.nothing_playing()

        if not self._driver.skip(queue):
            return CommandResult.error(
                CommandStatus.NOTHING_PLAYING, DiscordUIMessages.STATE_NOTHING_TO_SKIP
            )

        return CommandResult.success(DiscordUIMessages.ACTION_SKIPPED)
