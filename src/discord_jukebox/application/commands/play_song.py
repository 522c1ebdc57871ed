"""Command and handler for playing a song from a query, URL or catalog link."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ConfigDict, field_validator

from discord_jukebox.application.interfaces.notification_sink import NotificationSink
from discord_jukebox.domain.music.entities import GuildQueue, Song
from discord_jukebox.domain.shared.exceptions import (
    CatalogLinkError,
    NoResultsError,
    ResolverError,
    TransportError,
    VoiceConnectionError,
)
from discord_jukebox.domain.shared.messages import DiscordUIMessages, LogTemplates
from discord_jukebox.domain.shared.types import DiscordSnowflake, NonEmptyStr

from .base import CommandResult, CommandStatus, GuildCommand

if TYPE_CHECKING:
    from ...domain.music.repository import QueueRegistry
    from ..interfaces.audio_resolver import AudioResolver
    from ..interfaces.voice_adapter import VoiceAdapter
    from ..services.playback_driver import PlaybackDriver

logger = logging.getLogger(__name__)


class PlayCommand(GuildCommand):
    """Request to resolve a query and queue it, starting playback if the guild is idle."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    query: NonEmptyStr
    voice_channel_id: DiscordSnowflake | None
    notify_sink: NotificationSink

    @field_validator("query", mode="before")
    @classmethod
    def _strip_query(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v


class PlaySongHandler:
    """Resolves a song, then either creates the guild's queue or appends to it."""

    def __init__(
        self,
        *,
        registry: QueueRegistry,
        audio_resolver: AudioResolver,
        voice_adapter: VoiceAdapter,
        driver: PlaybackDriver,
    ) -> None:
        self._registry = registry
        self._audio_resolver = audio_resolver
        self._voice_adapter = voice_adapter
        self._driver = driver

    async def handle(self, command: PlayCommand) -> CommandResult:
        channel_id = command.voice_channel_id
        if channel_id is None:
            return CommandResult.error(
                CommandStatus.NOT_IN_VOICE, DiscordUIMessages.STATE_MUST_BE_IN_VOICE
            )

        if not self._voice_adapter.can_connect(command.guild_id, channel_id):
            return CommandResult.error(
                CommandStatus.MISSING_PERMISSIONS,
                DiscordUIMessages.ERROR_MISSING_VOICE_PERMISSIONS,
            )

        try:
            song = await self._audio_resolver.resolve(command.query)
        except CatalogLinkError:
            return CommandResult.error(
                CommandStatus.CATALOG_ERROR, DiscordUIMessages.ERROR_CATALOG_LINK
            )
        except NoResultsError:
            return CommandResult.error(CommandStatus.NO_RESULTS, DiscordUIMessages.ERROR_NO_RESULTS)
        except ResolverError:
            logger.exception(LogTemplates.PLAY_FAILED, command.guild_id, command.query)
            return CommandResult.error(CommandStatus.TRACK_ERROR, DiscordUIMessages.ERROR_TRACK)
        except Exception:
            logger.exception(LogTemplates.PLAY_UNEXPECTED_ERROR, command.guild_id, command.query)
            return CommandResult.error(CommandStatus.TRACK_ERROR, DiscordUIMessages.ERROR_TRACK)

        song = song.with_requester(command.user_id)

        # Looked up only after resolving: a concurrent play may have created the queue.
        queue = self._registry.get(command.guild_id)
        if queue is not None:
            position = queue.add(song)
            logger.info(LogTemplates.QUEUE_ENQUEUED, song.title, position, command.guild_id)

            handle = queue.voice_handle
            if handle is not None and handle.channel_id != channel_id:
                await self._driver.relocate(queue, channel_id)

            return CommandResult.success(
                DiscordUIMessages.ACTION_SONG_QUEUED.format(title=song.title),
                summary=self._driver.summarize(queue),
                status=CommandStatus.QUEUED,
            )

        return await self._start_new_queue(command, channel_id, song)

    async def _start_new_queue(
        self, command: PlayCommand, channel_id: int, song: Song
    ) -> CommandResult:
        queue = GuildQueue(
            guild_id=command.guild_id,
            player=self._voice_adapter.create_player(command.guild_id),
            notify_sink=command.notify_sink,
        )
        queue.add(song)
        # Registered before the join is awaited so concurrent plays append to it.
        self._registry.create(command.guild_id, queue)
        logger.info(LogTemplates.QUEUE_CREATED, command.guild_id)

        try:
            handle = await self._voice_adapter.join(command.guild_id, channel_id)
        except VoiceConnectionError as e:
            logger.warning(LogTemplates.VOICE_JOIN_FAILED, channel_id, command.guild_id, e)
            await self._driver.teardown(queue)
            return CommandResult.error(
                CommandStatus.VOICE_ERROR, DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE
            )

        if not self._registry.is_registered(queue):
            logger.info(LogTemplates.VOICE_JOIN_SUPERSEDED, command.guild_id)
            await self._voice_adapter.release(handle)
            return CommandResult.error(
                CommandStatus.CANCELLED, DiscordUIMessages.STATE_JOIN_CANCELLED
            )

        queue.voice_handle = handle
        try:
            queue.player.subscribe(handle)
        except TransportError as e:
            logger.error(LogTemplates.PLAYBACK_TRANSPORT_FAILED, command.guild_id, e)
            await self._driver.teardown(queue)
            return CommandResult.error(
                CommandStatus.VOICE_ERROR, DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE
            )

        try:
            started = await self._driver.start(queue)
        except Exception:
            logger.exception(LogTemplates.PLAY_UNEXPECTED_ERROR, command.guild_id, command.query)
            await self._driver.teardown(queue)
            return CommandResult.error(CommandStatus.TRACK_ERROR, DiscordUIMessages.ERROR_TRACK)

        if not started and not self._registry.is_registered(queue):
            return CommandResult.error(CommandStatus.TRACK_ERROR, DiscordUIMessages.ERROR_TRACK)

        return CommandResult.success(
            DiscordUIMessages.ACTION_NOW_PLAYING.format(title=song.title),
            summary=self._driver.summarize(queue),
            status=CommandStatus.NOW_PLAYING,
        )
