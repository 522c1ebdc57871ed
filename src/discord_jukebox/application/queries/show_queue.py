"""Query for showing the guild's now-playing song and what is up next."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..commands.base import CommandResult, GuildCommand

if TYPE_CHECKING:
    from ...domain.music.repository import QueueRegistry
    from ..services.playback_driver import PlaybackDriver


class ShowQueueQuery(GuildCommand):
    pass


class ShowQueueHandler:

    def __init__(self, *, registry: QueueRegistry, driver: PlaybackDriver) -> None:
        self._registry = registry
        self._driver = driver

    async def handle(self, query: ShowQueueQuery) -> CommandResult:
        queue = self._registry.get(query.guild_id)
        if queue is None:
            return CommandResult.nothing_playing()

        summary = self._driver.summarize(queue)
        return CommandResult.success(summary.render_description(), summary=summary)
