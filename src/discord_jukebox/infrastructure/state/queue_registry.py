"""In-memory implementation of the queue registry."""

from __future__ import annotations

import logging

from discord_jukebox.domain.music.entities import GuildQueue
from discord_jukebox.domain.music.repository import QueueRegistry
from discord_jukebox.domain.shared.exceptions import BusinessRuleViolationError
from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)


class InMemoryQueueRegistry(QueueRegistry):
    """Live queues keyed by guild ID. Queues never outlive the process."""

    def __init__(self) -> None:
        self._queues: dict[int, GuildQueue] = {}

    def get(self, guild_id: int) -> GuildQueue | None:
        return self._queues.get(guild_id)

    def create(self, guild_id: int, queue: GuildQueue) -> GuildQueue:
        if guild_id in self._queues:
            raise BusinessRuleViolationError(
                "one_queue_per_guild",
                ErrorMessages.QUEUE_ALREADY_REGISTERED.format(guild_id=guild_id),
            )
        self._queues[guild_id] = queue
        return queue

    def remove(self, guild_id: int) -> bool:
        if self._queues.pop(guild_id, None) is None:
            return False
        logger.debug(LogTemplates.QUEUE_REGISTRY_REMOVED, guild_id)
        return True

    def all(self) -> list[GuildQueue]:
        return list(self._queues.values())

    def count(self) -> int:
        return len(self._queues)
