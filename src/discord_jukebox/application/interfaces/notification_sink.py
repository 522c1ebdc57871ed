"""Port interface for the text channel that receives playback status messages."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..services.queue_models import QueueSummary


class NotificationSink(ABC):
    """Where now-playing summaries and queue notices are posted for a guild."""

    @abstractmethod
    async def send_summary(self, summary: QueueSummary) -> None:
        ...

    @abstractmethod
    async def send_message(self, content: str) -> None:
        ...
