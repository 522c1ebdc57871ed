"""NotificationSink that posts to the text channel a queue was started from."""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from discord_jukebox.application.interfaces.notification_sink import NotificationSink

from ..embeds import build_queue_embed

if TYPE_CHECKING:
    from ....application.services.queue_models import QueueSummary


class TextChannelSink(NotificationSink):
    def __init__(self, channel: discord.abc.Messageable) -> None:
        self._channel = channel

    @property
    def channel(self) -> discord.abc.Messageable:
        return self._channel

    async def send_summary(self, summary: QueueSummary) -> None:
        await self._channel.send(embed=build_queue_embed(summary))

    async def send_message(self, content: str) -> None:
        await self._channel.send(content)
