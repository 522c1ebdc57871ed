"""In-process state holders."""

from discord_jukebox.infrastructure.state.queue_registry import InMemoryQueueRegistry

__all__ = ["InMemoryQueueRegistry"]
