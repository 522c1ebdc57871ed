"""Per-guild playback state machine.

The driver owns every transition of a live :class:`GuildQueue`:

* ``start``: derive a stream for the head song, arm the player's one-shot
  idle callback and play it, then post the now-playing summary.
* ``handle_completion``: apply loop semantics to the song that just ended
  and ``advance``.
* ``advance``: wrap a queue-looped queue from its history, start the next
  head, or tear the queue down when nothing is left.
* ``teardown``: drop the registry entry, stop the player and release the
  voice session.

No locks are used. Queue mutations happen between awaits, and work that
resumes after an await first checks that the queue is still the registry's
entry and that its play token has not moved on.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ...domain.music.value_objects import LoopMode
from ...domain.shared.exceptions import ResolverError, TransportError, VoiceConnectionError
from ...domain.shared.messages import DiscordUIMessages, LogTemplates
from .queue_models import QueueSummary

if TYPE_CHECKING:
    from ...domain.music.entities import GuildQueue, Song
    from ...domain.music.repository import QueueRegistry
    from ..interfaces.audio_resolver import AudioResolver
    from ..interfaces.voice_adapter import VoiceAdapter

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONSECUTIVE_FAILURES = 3


class PlaybackDriver:
    def __init__(
        self,
        *,
        registry: QueueRegistry,
        audio_resolver: AudioResolver,
        voice_adapter: VoiceAdapter,
        max_consecutive_failures: int = DEFAULT_MAX_CONSECUTIVE_FAILURES,
        summary_limit: int = 10,
    ) -> None:
        self._registry = registry
        self._audio_resolver = audio_resolver
        self._voice_adapter = voice_adapter
        self._max_failures = max_consecutive_failures
        self._summary_limit = summary_limit
        self._tasks: set[asyncio.Task[None]] = set()

    def summarize(self, queue: GuildQueue) -> QueueSummary:
        return QueueSummary.from_queue(queue, self._summary_limit)

    def _is_live(self, queue: GuildQueue, token: int) -> bool:
        return self._registry.is_registered(queue) and queue.is_current(token)

    # ─────────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────────

    async def start(self, queue: GuildQueue) -> bool:
        """Start the head song. Returns True if playback began."""
        song = queue.head
        if song is None:
            await self.advance(queue)
            return False

        token = queue.begin_start()

        try:
            resource = await self._audio_resolver.create_resource(song.locator)
        except ResolverError as e:
            queue.finish_start(token)
            await self._on_stream_failure(queue, token, song, e)
            return False

        if not self._is_live(queue, token):
            logger.debug(LogTemplates.PLAYBACK_SUPERSEDED, queue.guild_id, token)
            return False
        queue.finish_start(token)

        # A skip that arrived while the stream was being derived.
        if queue.skip_requested:
            queue.complete_current(skipped=True)
            logger.info(LogTemplates.SONG_SKIPPED, song.title, queue.guild_id)
            await self.advance(queue)
            return False

        try:
            queue.player.once_idle(lambda: self._on_idle(queue, token))
            queue.player.play(resource)
        except TransportError as e:
            logger.error(LogTemplates.PLAYBACK_TRANSPORT_FAILED, queue.guild_id, e)
            await self.teardown(queue, notify_message=DiscordUIMessages.STATE_VOICE_LOST)
            return False

        queue.consecutive_failures = 0
        logger.info(LogTemplates.PLAYBACK_STARTED, song.title, queue.guild_id)
        await self._notify_summary(queue)
        return True

    async def _on_stream_failure(
        self, queue: GuildQueue, token: int, song: Song, error: Exception
    ) -> None:
        if not self._is_live(queue, token):
            return

        logger.warning(LogTemplates.PLAYBACK_STREAM_FAILED, song.title, queue.guild_id, error)
        queue.consecutive_failures += 1

        if queue.consecutive_failures >= self._max_failures:
            logger.error(
                LogTemplates.PLAYBACK_FAILURE_LIMIT, queue.guild_id, queue.consecutive_failures
            )
            await self.teardown(queue, notify_message=DiscordUIMessages.STATE_QUEUE_ENDED)
            return

        queue.complete_current(skipped=True)
        await self._notify_message(
            queue, DiscordUIMessages.ERROR_SONG_UNPLAYABLE.format(title=song.title)
        )
        await self.advance(queue)

    def _on_idle(self, queue: GuildQueue, token: int) -> None:
        """Idle callback, invoked on the event loop by the player."""
        logger.debug(LogTemplates.PLAYBACK_IDLE, queue.guild_id, token)
        task = asyncio.create_task(self.handle_completion(queue, token))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def handle_completion(self, queue: GuildQueue, token: int) -> None:
        """React to the end of the resource started under *token*.

        Runs as a detached task, so anything unexpected is logged here and
        the queue torn down rather than left registered without a player.
        """
        try:
            await self._complete(queue, token)
        except Exception:
            logger.exception(LogTemplates.PLAYBACK_UNEXPECTED_ERROR, queue.guild_id)
            await self.teardown(queue, notify_message=DiscordUIMessages.STATE_QUEUE_ENDED)

    async def _complete(self, queue: GuildQueue, token: int) -> None:
        if not self._is_live(queue, token):
            logger.debug(LogTemplates.PLAYBACK_STALE_COMPLETION, queue.guild_id, token)
            return

        skipped = queue.skip_requested
        finished = queue.complete_current()
        if finished is not None:
            logger.info(
                LogTemplates.SONG_FINISHED,
                finished.title,
                queue.guild_id,
                queue.loop_mode.value,
                skipped,
            )

        await self.advance(queue)

    async def advance(self, queue: GuildQueue) -> None:
        if not self._registry.is_registered(queue):
            return

        if not queue.has_pending:
            if queue.loop_mode is LoopMode.QUEUE and queue.history:
                refilled = queue.refill_from_history()
                logger.info(LogTemplates.QUEUE_WRAPPED, queue.guild_id, refilled)
            else:
                logger.info(LogTemplates.QUEUE_TORN_DOWN, queue.guild_id)
                await self.teardown(queue, notify_message=DiscordUIMessages.STATE_QUEUE_ENDED)
                return

        await self.start(queue)

    def skip(self, queue: GuildQueue) -> bool:
        """Discard the current song; the next completion or Start advances.

        A song whose stream is still being derived is dropped as soon as the
        stream arrives. Returns False when there is nothing to skip.
        """
        song = queue.head
        if queue.player.is_active:
            queue.request_skip()
            queue.player.stop()
        elif queue.starting and song is not None:
            queue.request_skip()
        else:
            return False

        if song is not None:
            logger.info(LogTemplates.SONG_SKIP_REQUESTED, song.title, queue.guild_id)
        return True

    async def teardown(self, queue: GuildQueue, notify_message: str | None = None) -> None:
        """Destroy a queue: unregister, stop and release its voice session.

        The synchronous part runs before the first await, so no other
        reaction can observe a half torn-down queue in the registry.
        """
        was_registered = self._registry.is_registered(queue)
        if was_registered:
            self._registry.remove(queue.guild_id)

        queue.clear()
        queue.invalidate()
        queue.player.cancel_idle()
        queue.player.stop()
        handle, queue.voice_handle = queue.voice_handle, None

        if handle is not None:
            await self._voice_adapter.release(handle)

        if was_registered:
            logger.info(LogTemplates.PLAYBACK_STOPPED, queue.guild_id)
            if notify_message:
                await self._notify_message(queue, notify_message)

    # ─────────────────────────────────────────────────────────────────
    # Voice residency
    # ─────────────────────────────────────────────────────────────────

    async def relocate(self, queue: GuildQueue, channel_id: int) -> bool:
        """Move the queue's voice session to *channel_id*, keeping the same player.

        Pending songs, history and loop mode are left untouched. A failed
        join tears the queue down.
        """
        old_handle = queue.voice_handle
        if old_handle is None:
            return False

        logger.info(LogTemplates.VOICE_RELOCATING, channel_id, queue.guild_id)
        queue.player.detach()
        queue.voice_handle = None
        await self._voice_adapter.release(old_handle)

        try:
            handle = await self._voice_adapter.join(queue.guild_id, channel_id)
        except VoiceConnectionError as e:
            logger.warning(LogTemplates.VOICE_RELOCATE_FAILED, channel_id, queue.guild_id, e)
            await self.teardown(queue, notify_message=DiscordUIMessages.STATE_VOICE_LOST)
            return False

        if not self._registry.is_registered(queue):
            logger.info(LogTemplates.VOICE_JOIN_SUPERSEDED, queue.guild_id)
            await self._voice_adapter.release(handle)
            return False

        queue.voice_handle = handle
        try:
            queue.player.subscribe(handle)
        except TransportError as e:
            logger.error(LogTemplates.PLAYBACK_TRANSPORT_FAILED, queue.guild_id, e)
            await self.teardown(queue, notify_message=DiscordUIMessages.STATE_VOICE_LOST)
            return False

        logger.info(LogTemplates.VOICE_RELOCATED, channel_id, queue.guild_id)
        return True

    # ─────────────────────────────────────────────────────────────────
    # Notifications
    # ─────────────────────────────────────────────────────────────────

    async def _notify_summary(self, queue: GuildQueue) -> None:
        try:
            await queue.notify_sink.send_summary(self.summarize(queue))
        except Exception as e:
            logger.warning(LogTemplates.NOTIFY_FAILED, queue.guild_id, e)

    async def _notify_message(self, queue: GuildQueue, content: str) -> None:
        try:
            await queue.notify_sink.send_message(content)
        except Exception as e:
            logger.warning(LogTemplates.NOTIFY_FAILED, queue.guild_id, e)
