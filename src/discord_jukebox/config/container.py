"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the registry, adapters, driver and handlers.
Components are created on-demand and cached for reuse throughout the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.commands.dispatcher import MusicCommandDispatcher
    from ..application.commands.pause_resume import (
        PausePlaybackHandler,
        ResumePlaybackHandler,
    )
    from ..application.commands.play_song import PlaySongHandler
    from ..application.commands.set_loop_mode import SetLoopModeHandler
    from ..application.commands.skip_song import SkipSongHandler
    from ..application.commands.stop_playback import StopPlaybackHandler
    from ..application.interfaces.audio_resolver import AudioResolver, CatalogTranslator
    from ..application.interfaces.voice_adapter import VoiceAdapter
    from ..application.queries.show_queue import ShowQueueHandler
    from ..application.services.playback_driver import PlaybackDriver
    from ..application.services.residency_monitor import ResidencyMonitor
    from ..domain.music.repository import QueueRegistry
    from ..infrastructure.audio.spotify_catalog import SpotifyCatalogTranslator
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    This container manages all application dependencies and their lifecycle.
    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    # State
    _queue_registry: QueueRegistry | None = None

    # Infrastructure adapters
    _catalog_translator: SpotifyCatalogTranslator | None = None
    _audio_resolver: AudioResolver | None = None
    _voice_adapter: VoiceAdapter | None = None

    # Application services
    _playback_driver: PlaybackDriver | None = None
    _residency_monitor: ResidencyMonitor | None = None

    # Command handlers
    _play_song_handler: PlaySongHandler | None = None
    _skip_song_handler: SkipSongHandler | None = None
    _pause_playback_handler: PausePlaybackHandler | None = None
    _resume_playback_handler: ResumePlaybackHandler | None = None
    _stop_playback_handler: StopPlaybackHandler | None = None
    _set_loop_mode_handler: SetLoopModeHandler | None = None

    # Query handlers
    _show_queue_handler: ShowQueueHandler | None = None

    _dispatcher: MusicCommandDispatcher | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === State ===

    @property
    def queue_registry(self) -> QueueRegistry:
        """Get the in-memory queue registry."""
        if self._queue_registry is None:
            from ..infrastructure.state.queue_registry import InMemoryQueueRegistry

            self._queue_registry = InMemoryQueueRegistry()
        return self._queue_registry

    # === Infrastructure Adapters ===

    @property
    def catalog_translator(self) -> CatalogTranslator:
        """Get the Spotify link translator."""
        if self._catalog_translator is None:
            from ..infrastructure.audio.spotify_catalog import SpotifyCatalogTranslator

            self._catalog_translator = SpotifyCatalogTranslator(self.settings.resolver)
        return self._catalog_translator

    @property
    def audio_resolver(self) -> AudioResolver:
        """Get the audio resolver."""
        if self._audio_resolver is None:
            from ..infrastructure.audio.ytdlp_resolver import YtDlpResolver

            self._audio_resolver = YtDlpResolver(
                self.settings.audio,
                self.settings.resolver,
                catalog_translator=self.catalog_translator,
            )
        return self._audio_resolver

    @property
    def voice_adapter(self) -> VoiceAdapter:
        """Get the voice adapter."""
        if self._voice_adapter is None:
            from ..infrastructure.discord.adapters.voice_adapter import (
                DiscordVoiceAdapter,
            )

            self._voice_adapter = DiscordVoiceAdapter(
                self.bot, self.settings.audio, self.settings.resolver
            )
        return self._voice_adapter

    # === Application Services ===

    @property
    def playback_driver(self) -> PlaybackDriver:
        """Get the per-guild playback driver."""
        if self._playback_driver is None:
            from ..application.services.playback_driver import PlaybackDriver

            self._playback_driver = PlaybackDriver(
                registry=self.queue_registry,
                audio_resolver=self.audio_resolver,
                voice_adapter=self.voice_adapter,
                max_consecutive_failures=self.settings.playback.max_consecutive_failures,
                summary_limit=self.settings.playback.queue_page_size,
            )
        return self._playback_driver

    @property
    def residency_monitor(self) -> ResidencyMonitor:
        """Get the voice residency monitor."""
        if self._residency_monitor is None:
            from ..application.services.residency_monitor import ResidencyMonitor

            self._residency_monitor = ResidencyMonitor(
                registry=self.queue_registry,
                voice_adapter=self.voice_adapter,
                driver=self.playback_driver,
            )
        return self._residency_monitor

    # === Command Handlers ===

    @property
    def play_song_handler(self) -> PlaySongHandler:
        if self._play_song_handler is None:
            from ..application.commands.play_song import PlaySongHandler

            self._play_song_handler = PlaySongHandler(
                registry=self.queue_registry,
                audio_resolver=self.audio_resolver,
                voice_adapter=self.voice_adapter,
                driver=self.playback_driver,
            )
        return self._play_song_handler

    @property
    def skip_song_handler(self) -> SkipSongHandler:
        if self._skip_song_handler is None:
            from ..application.commands.skip_song import SkipSongHandler

            self._skip_song_handler = SkipSongHandler(
                registry=self.queue_registry, driver=self.playback_driver
            )
        return self._skip_song_handler

    @property
    def pause_playback_handler(self) -> PausePlaybackHandler:
        if self._pause_playback_handler is None:
            from ..application.commands.pause_resume import PausePlaybackHandler

            self._pause_playback_handler = PausePlaybackHandler(registry=self.queue_registry)
        return self._pause_playback_handler

    @property
    def resume_playback_handler(self) -> ResumePlaybackHandler:
        if self._resume_playback_handler is None:
            from ..application.commands.pause_resume import ResumePlaybackHandler

            self._resume_playback_handler = ResumePlaybackHandler(registry=self.queue_registry)
        return self._resume_playback_handler

    @property
    def stop_playback_handler(self) -> StopPlaybackHandler:
        if self._stop_playback_handler is None:
            from ..application.commands.stop_playback import StopPlaybackHandler

            self._stop_playback_handler = StopPlaybackHandler(
                registry=self.queue_registry, driver=self.playback_driver
            )
        return self._stop_playback_handler

    @property
    def set_loop_mode_handler(self) -> SetLoopModeHandler:
        if self._set_loop_mode_handler is None:
            from ..application.commands.set_loop_mode import SetLoopModeHandler

            self._set_loop_mode_handler = SetLoopModeHandler(registry=self.queue_registry)
        return self._set_loop_mode_handler

    # === Query Handlers ===

    @property
    def show_queue_handler(self) -> ShowQueueHandler:
        if self._show_queue_handler is None:
            from ..application.queries.show_queue import ShowQueueHandler

            self._show_queue_handler = ShowQueueHandler(
                registry=self.queue_registry, driver=self.playback_driver
            )
        return self._show_queue_handler

    @property
    def dispatcher(self) -> MusicCommandDispatcher:
        """Get the command dispatcher used by the music cog."""
        if self._dispatcher is None:
            from ..application.commands.dispatcher import MusicCommandDispatcher

            self._dispatcher = MusicCommandDispatcher(
                play=self.play_song_handler,
                skip=self.skip_song_handler,
                pause=self.pause_playback_handler,
                resume=self.resume_playback_handler,
                stop=self.stop_playback_handler,
                loop=self.set_loop_mode_handler,
                show_queue=self.show_queue_handler,
            )
        return self._dispatcher

    # === Lifecycle ===

    async def shutdown(self) -> int:
        """Tear down every live queue and close network clients.

        Returns the number of queues released.
        """
        released = 0
        if self._queue_registry is not None and self._playback_driver is not None:
            for queue in self._queue_registry.all():
                try:
                    await self._playback_driver.teardown(queue)
                    released += 1
                except Exception as exc:
                    logger.warning("Failed releasing queue for guild %s: %r", queue.guild_id, exc)

        if self._catalog_translator is not None:
            await self._catalog_translator.aclose()

        return released


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
