"""Core domain entities for the music bounded context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, field_validator

from discord_jukebox.domain.music.value_objects import LoopMode, VideoId
from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.domain.shared.types import (
    DiscordSnowflake,
    HttpUrlStr,
    NonEmptyStr,
    SongTitleStr,
)
from discord_jukebox.domain.shared.validators import validate_non_empty_string

if TYPE_CHECKING:
    from discord_jukebox.application.interfaces.notification_sink import NotificationSink
    from discord_jukebox.application.interfaces.voice_adapter import AudioPlayer, VoiceHandle

DEFAULT_UPCOMING_LIMIT = 10


class Song(BaseModel):
    """Immutable record describing one playable item.

    ``locator`` is the page URL the stream is derived from. It is never
    re-resolved to a different song while the record sits in a queue.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    title: SongTitleStr
    locator: HttpUrlStr
    duration: NonEmptyStr | None = None
    requester_id: DiscordSnowflake | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        return validate_non_empty_string(v, "title")

    @property
    def duration_display(self) -> str:
        return self.duration or DiscordUIMessages.DURATION_UNKNOWN

    @property
    def requester_mention(self) -> str:
        if self.requester_id is None:
            return "someone"
        return f"<@{self.requester_id}>"

    @property
    def video_id(self) -> VideoId | None:
        return VideoId.from_locator(self.locator)

    def with_requester(self, user_id: DiscordSnowflake) -> Song:
        """Return a copy of this song attributed to *user_id*."""
        return self.model_copy(update={"requester_id": user_id})


@dataclass(eq=False)
class GuildQueue:
    """Mutable per-guild playback state.

    Compared by identity: async work holding a reference checks it is still
    the registry's entry before acting on it. Every method is synchronous so a
    mutation never spans an await.
    """

    guild_id: int
    player: AudioPlayer
    notify_sink: NotificationSink
    voice_handle: VoiceHandle | None = None
    pending: list[Song] = field(default_factory=list)
    history: list[Song] = field(default_factory=list)
    loop_mode: LoopMode = LoopMode.OFF

    # Start attempts are numbered; work started under an older token is inert.
    play_token: int = 0
    skip_requested: bool = False
    consecutive_failures: int = 0
    # True between begin_start and the stream being handed to the player.
    starting: bool = False

    @property
    def head(self) -> Song | None:
        """The song playing now, or about to play."""
        return self.pending[0] if self.pending else None

    @property
    def has_pending(self) -> bool:
        return bool(self.pending)

    @property
    def is_transitioning(self) -> bool:
        """True while a voice join or relocation is in flight."""
        return self.voice_handle is None

    def add(self, song: Song) -> int:
        """Append *song* to the pending list and the history, returning its index."""
        self.pending.append(song)
        self.history.append(song)
        return len(self.pending) - 1

    def upcoming(self, limit: int = DEFAULT_UPCOMING_LIMIT) -> list[Song]:
        return self.pending[1 : 1 + limit]

    def begin_start(self) -> int:
        self.play_token += 1
        self.starting = True
        return self.play_token

    def finish_start(self, token: int) -> None:
        if self.is_current(token):
            self.starting = False

    def invalidate(self) -> None:
        """Make any in-flight start or completion for this queue inert."""
        self.play_token += 1

    def is_current(self, token: int) -> bool:
        return token == self.play_token

    def request_skip(self) -> None:
        self.skip_requested = True

    def complete_current(self, skipped: bool = False) -> Song | None:
        """Apply loop semantics to the song that just finished.

        A requested skip always discards the head, whatever the loop mode.
        Returns the finished song, or None if nothing was pending.
        """
        if not self.pending:
            self.skip_requested = False
            return None

        finished = self.pending[0]
        discard = skipped or self.skip_requested
        self.skip_requested = False

        if discard or self.loop_mode is LoopMode.OFF:
            self.pending.pop(0)
        elif self.loop_mode is LoopMode.QUEUE:
            self.pending.pop(0)
            self.pending.append(finished)
        # LoopMode.SONG keeps the head in place.

        return finished

    def refill_from_history(self) -> int:
        """Reset pending to a copy of the history and return its length."""
        self.pending = list(self.history)
        return len(self.pending)

    def clear(self) -> int:
        count = len(self.pending)
        self.pending.clear()
        self.skip_requested = False
        self.starting = False
        return count
