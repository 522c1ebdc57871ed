# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic:
- shared/: Constrained types, messages and exceptions
- music/: Songs, guild queues, loop modes and the queue registry contract
"""

from discord_jukebox.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
