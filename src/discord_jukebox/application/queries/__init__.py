"""
Application Queries (CQRS Read Side)

Query objects and handlers for read operations.
Queries do not modify state, only retrieve data.
"""

from discord_jukebox.application.queries.show_queue import ShowQueueHandler, ShowQueueQuery

__all__ = [
    "ShowQueueQuery",
    "ShowQueueHandler",
]
