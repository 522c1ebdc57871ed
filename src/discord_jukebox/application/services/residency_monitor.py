"""Reacts to voice membership changes for guilds with a live queue."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from ...domain.music.repository import QueueRegistry
    from ..interfaces.voice_adapter import VoiceAdapter
    from .playback_driver import PlaybackDriver

logger = logging.getLogger(__name__)


class ResidencyMonitor:
    """Follows listeners between channels and notices when the bot is dropped."""

    def __init__(
        self,
        *,
        registry: QueueRegistry,
        voice_adapter: VoiceAdapter,
        driver: PlaybackDriver,
    ) -> None:
        self._registry = registry
        self._voice_adapter = voice_adapter
        self._driver = driver

    async def handle_member_moved(
        self,
        guild_id: int,
        before_channel_id: int | None,
        after_channel_id: int | None,
    ) -> bool:
        """Relocate when a listener moves out of the bot's channel into another one.

        Joins, leaves and moves between channels the bot is not in are
        ignored, as are moves while a join or relocation is in flight.
        Returns True if the bot relocated.
        """
        if before_channel_id is None or after_channel_id is None:
            return False
        if before_channel_id == after_channel_id:
            return False

        queue = self._registry.get(guild_id)
        if queue is None or queue.voice_handle is None:
            return False

        bot_channel_id = queue.voice_handle.channel_id
        if bot_channel_id != before_channel_id or bot_channel_id == after_channel_id:
            return False

        if not self._voice_adapter.can_connect(guild_id, after_channel_id):
            logger.info(LogTemplates.VOICE_RELOCATE_DENIED, after_channel_id, guild_id)
            return False

        return await self._driver.relocate(queue, after_channel_id)

    async def handle_bot_voice_update(
        self,
        guild_id: int,
        before_channel_id: int | None,
        after_channel_id: int | None,
    ) -> bool:
        """Tear the queue down when the bot's own session is dropped externally.

        Releases the driver performs itself are not seen here: the handle is
        cleared before the session is closed.
        Returns True if a queue was torn down.
        """
        if after_channel_id is not None or before_channel_id is None:
            return False

        queue = self._registry.get(guild_id)
        if queue is None or queue.voice_handle is None:
            return False

        handle_channel_id = queue.voice_handle.channel_id
        if handle_channel_id is not None and handle_channel_id != before_channel_id:
            return False

        logger.warning(LogTemplates.VOICE_SESSION_DROPPED, guild_id, before_channel_id)
        await self._driver.teardown(queue, notify_message=DiscordUIMessages.STATE_VOICE_LOST)
        return True

    async def handle_guild_removed(self, guild_id: int) -> bool:
        queue = self._registry.get(guild_id)
        if queue is None:
            return False

        await self._driver.teardown(queue)
        return True
