"""
FFmpeg Audio Player

Per-guild AudioPlayer that streams through discord.py's FFmpegPCMAudio.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import discord

from discord_jukebox.application.interfaces.voice_adapter import (
    AudioPlayer,
    IdleCallback,
    VoiceHandle,
)
from discord_jukebox.config.settings import AudioSettings, ResolverSettings
from discord_jukebox.domain.shared.exceptions import TransportError
from discord_jukebox.domain.shared.messages import LogTemplates
from discord_jukebox.infrastructure.discord.adapters.voice_handle import DiscordVoiceHandle

if TYPE_CHECKING:
    from ...application.interfaces.audio_resolver import AudioResource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FFmpegConfig:
    """Configuration for FFmpeg audio processing."""

    before_options: str = "-reconnect 1 -reconnect_streamed 1 -reconnect_delay_max 5"
    options: str = "-vn"
    user_agent: str = ""
    default_volume: float = 0.5

    @classmethod
    def from_settings(
        cls, audio: AudioSettings, resolver: ResolverSettings | None = None
    ) -> FFmpegConfig:
        return cls(
            before_options=audio.ffmpeg_options.get("before_options", ""),
            options=audio.ffmpeg_options.get("options", ""),
            user_agent=resolver.user_agent if resolver is not None else "",
            default_volume=audio.default_volume,
        )

    def get_before_options(self, offset: float = 0.0) -> str:
        """FFmpeg input options, seeking to *offset* seconds when resuming."""
        opts = [self.before_options] if self.before_options else []
        if self.user_agent:
            opts.append(f"-user_agent {shlex.quote(self.user_agent)}")
        if offset > 0:
            opts.append(f"-ss {offset:.2f}")
        return " ".join(opts)


class FFmpegAudioPlayer(AudioPlayer):
    """Plays one resource at a time on whichever voice session it is subscribed to.

    discord.py calls ``after`` on its audio thread. Each source is started
    under a generation number and its ``after`` is marshalled back onto the
    event loop, where anything from an older generation is dropped. Stopped
    or detached sources therefore never fire the idle callback late.
    """

    def __init__(
        self,
        guild_id: int,
        config: FFmpegConfig | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._guild_id = guild_id
        self._config = config or FFmpegConfig()
        self._loop = loop or asyncio.get_running_loop()

        self._voice_client: discord.VoiceClient | None = None
        self._resource: AudioResource | None = None
        self._idle_callback: IdleCallback | None = None
        self._generation = 0
        self._paused = False

        # Playback position: seconds banked so far plus the running stretch.
        self._elapsed_base = 0.0
        self._resumed_at: float | None = None

    # ─────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────

    @property
    def is_active(self) -> bool:
        return self._resource is not None

    @property
    def is_paused(self) -> bool:
        return self._resource is not None and self._paused

    @property
    def is_subscribed(self) -> bool:
        return self._voice_client is not None

    @property
    def position(self) -> float:
        if self._resumed_at is None:
            return self._elapsed_base
        return self._elapsed_base + (time.monotonic() - self._resumed_at)

    def _freeze_position(self) -> None:
        self._elapsed_base = self.position
        self._resumed_at = None

    def _reset_position(self) -> None:
        self._elapsed_base = 0.0
        self._resumed_at = None

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    # ─────────────────────────────────────────────────────────────────
    # Voice session
    # ─────────────────────────────────────────────────────────────────

    def subscribe(self, handle: VoiceHandle) -> None:
        if not isinstance(handle, DiscordVoiceHandle):
            raise TypeError(f"Unsupported voice handle: {handle!r}")

        self._voice_client = handle.client
        if self._resource is not None:
            offset = self._elapsed_base
            logger.info(LogTemplates.PLAYBACK_RESTART_AT, self._guild_id, offset)
            self._start_source(offset)

    def detach(self) -> None:
        self._freeze_position()
        self._next_generation()
        vc, self._voice_client = self._voice_client, None
        if vc is not None and (vc.is_playing() or vc.is_paused()):
            vc.stop()

    # ─────────────────────────────────────────────────────────────────
    # Playback
    # ─────────────────────────────────────────────────────────────────

    def play(self, resource: AudioResource) -> None:
        self._resource = resource
        self._paused = False
        self._reset_position()
        self._next_generation()

        # While detached the resource waits for the next subscribe.
        if self._voice_client is None:
            return

        self._start_source(0.0)

    def _start_source(self, offset: float) -> None:
        vc = self._voice_client
        resource = self._resource
        if vc is None or resource is None:
            return
        if not vc.is_connected():
            raise TransportError(self._guild_id)

        generation = self._next_generation()
        try:
            source = discord.FFmpegPCMAudio(
                resource.stream_url,
                before_options=self._config.get_before_options(offset),
                options=self._config.options,
            )
            volume_source = discord.PCMVolumeTransformer(
                source, volume=self._config.default_volume
            )

            if vc.is_playing() or vc.is_paused():
                vc.stop()
            vc.play(volume_source, after=self._make_after(generation))
        except discord.ClientException as e:
            raise TransportError(self._guild_id, str(e)) from e

        self._elapsed_base = offset
        if self._paused:
            vc.pause()
            self._resumed_at = None
        else:
            self._resumed_at = time.monotonic()

    def _make_after(self, generation: int) -> Callable[[Exception | None], None]:
        def after(error: Exception | None) -> None:
            # Runs on the audio thread.
            try:
                self._loop.call_soon_threadsafe(self._on_source_end, generation, error)
            except RuntimeError:
                logger.debug(LogTemplates.PLAYBACK_STALE_IDLE, self._guild_id)

        return after

    def _on_source_end(self, generation: int, error: Exception | None) -> None:
        if generation != self._generation:
            logger.debug(LogTemplates.PLAYBACK_STALE_IDLE, self._guild_id)
            return

        if error is not None:
            logger.warning(LogTemplates.PLAYBACK_ERROR, self._guild_id, error)

        self._resource = None
        self._paused = False
        self._reset_position()

        callback, self._idle_callback = self._idle_callback, None
        if callback is not None:
            callback()

    def pause(self) -> bool:
        if self._resource is None or self._paused:
            return False

        self._paused = True
        self._freeze_position()
        vc = self._voice_client
        if vc is not None and vc.is_playing():
            vc.pause()
        return True

    def unpause(self) -> bool:
        if self._resource is None or not self._paused:
            return False

        self._paused = False
        vc = self._voice_client
        if vc is not None:
            if vc.is_paused():
                vc.resume()
            self._resumed_at = time.monotonic()
        return True

    def stop(self) -> None:
        self._resource = None
        self._paused = False
        self._reset_position()

        # The stopped source's own ``after`` becomes stale; idle is signalled here.
        generation = self._next_generation()
        vc = self._voice_client
        if vc is not None and (vc.is_playing() or vc.is_paused()):
            vc.stop()
        self._loop.call_soon(self._on_source_end, generation, None)

    def once_idle(self, callback: IdleCallback) -> None:
        self._idle_callback = callback

    def cancel_idle(self) -> None:
        self._idle_callback = None
