"""Command and handler for changing a guild's loop mode."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import field_validator

from discord_jukebox.domain.music.value_objects import LoopMode
from discord_jukebox.domain.shared.messages import DiscordUIMessages, LogTemplates

from .base import CommandResult, GuildCommand

if TYPE_CHECKING:
    from ...domain.music.repository import QueueRegistry

logger = logging.getLogger(__name__)


class LoopCommand(GuildCommand):
    """Command to set the loop mode to off, song or queue."""

    mode: LoopMode

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_mode(cls, v: LoopMode | str) -> LoopMode:
        if isinstance(v, str):
            return LoopMode.parse(v)
        return v


class SetLoopModeHandler:
    def __init__(self, *, registry: QueueRegistry) -> None:
        self._registry = registry

    async def handle(self, command: LoopCommand) -> CommandResult:
        queue = self._registry.get(command.guild_id)
        if queue is None:
            return CommandResult.nothing_playing()

        queue.loop_mode = command.mode
        logger.info(LogTemplates.LOOP_MODE_CHANGED, command.mode.value, command.guild_id)
        return CommandResult.success(
            DiscordUIMessages.ACTION_LOOP_MODE_CHANGED.format(mode=command.mode.value)
        )
