"""Port interfaces for Discord voice sessions and per-guild audio players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.types import ChannelIdField, DiscordSnowflake

if TYPE_CHECKING:
    from .audio_resolver import AudioResource

IdleCallback = Callable[[], None]


class VoiceHandle(ABC):
    """A live voice session bound to one channel."""

    @property
    @abstractmethod
    def guild_id(self) -> DiscordSnowflake:
        ...

    @property
    @abstractmethod
    def channel_id(self) -> ChannelIdField | None:
        """The channel the session currently sits in, or None once dropped."""
        ...

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        ...


class AudioPlayer(ABC):
    """Per-guild playback engine, bound 1:1 to a guild queue for its lifetime.

    The idle callback is one-shot: it fires at most once per armed cycle,
    on the event loop, after the current resource ends or is stopped.
    """

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """True while a resource is loaded (playing or paused)."""
        ...

    @property
    @abstractmethod
    def is_paused(self) -> bool:
        ...

    @abstractmethod
    def subscribe(self, handle: VoiceHandle) -> None:
        """Attach to a voice session, resuming any loaded resource where it left off.

        Raises:
            TransportError: The session rejected the resumed stream.
        """
        ...

    @abstractmethod
    def detach(self) -> None:
        """Detach from the current voice session without firing the idle callback."""
        ...

    @abstractmethod
    def play(self, resource: AudioResource) -> None:
        """Start *resource* from the beginning.

        Raises:
            TransportError: The voice session rejected the stream.
        """
        ...

    @abstractmethod
    def pause(self) -> bool:
        ...

    @abstractmethod
    def unpause(self) -> bool:
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop the current resource; an armed idle callback fires."""
        ...

    @abstractmethod
    def once_idle(self, callback: IdleCallback) -> None:
        """Arm the idle callback, replacing any previously armed one."""
        ...

    @abstractmethod
    def cancel_idle(self) -> None:
        ...


class VoiceAdapter(ABC):
    """Interface for Discord voice channel operations."""

    @abstractmethod
    def can_connect(self, guild_id: DiscordSnowflake, channel_id: ChannelIdField) -> bool:
        """True if the bot has Connect and Speak in the channel."""
        ...

    @abstractmethod
    async def join(self, guild_id: DiscordSnowflake, channel_id: ChannelIdField) -> VoiceHandle:
        """Open a voice session in a channel.

        Raises:
            VoiceConnectionError: The channel could not be joined.
        """
        ...

    @abstractmethod
    async def release(self, handle: VoiceHandle) -> None:
        """Close a voice session. Never raises."""
        ...

    @abstractmethod
    def create_player(self, guild_id: DiscordSnowflake) -> AudioPlayer:
        ...
