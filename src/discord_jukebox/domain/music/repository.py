"""
Music Domain Registry Interface

Abstract base class defining the contract for holding live guild queues.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from discord_jukebox.domain.music.entities import GuildQueue


class QueueRegistry(ABC):
    """Abstract registry mapping guild IDs to their live queue.

    All methods are synchronous: registry access never yields control, so a
    lookup followed by a create cannot interleave with another reaction.
    """

    @abstractmethod
    def get(self, guild_id: int) -> GuildQueue | None:
        """Return the live queue for a guild, or None."""
        ...

    @abstractmethod
    def create(self, guild_id: int, queue: GuildQueue) -> GuildQueue:
        """Register a new queue.

        Raises:
            BusinessRuleViolationError: If the guild already has a queue.
        """
        ...

    @abstractmethod
    def remove(self, guild_id: int) -> bool:
        """Remove a guild's queue. Returns True if one was registered."""
        ...

    @abstractmethod
    def all(self) -> list[GuildQueue]:
        """Return a snapshot of every live queue."""
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    def is_registered(self, queue: GuildQueue) -> bool:
        """True if *queue* is still the registry's entry for its guild."""
        return self.get(queue.guild_id) is queue
