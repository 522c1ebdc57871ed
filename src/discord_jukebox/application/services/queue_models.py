"""Read models describing a guild queue for replies and notifications."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ...domain.music.entities import DEFAULT_UPCOMING_LIMIT, GuildQueue, Song
from ...domain.music.value_objects import LoopMode
from ...domain.shared.messages import DiscordUIMessages
from ...domain.shared.types import NonNegativeInt, PositiveInt


class SongEntry(BaseModel):
    """One rendered line of the queue summary."""

    model_config = ConfigDict(frozen=True)

    position: PositiveInt
    title: str
    duration: str
    requester: str

    @classmethod
    def from_song(cls, song: Song, position: int) -> SongEntry:
        return cls(
            position=position,
            title=song.title,
            duration=song.duration_display,
            requester=song.requester_mention,
        )

    @property
    def line(self) -> str:
        return DiscordUIMessages.EMBED_SONG_LINE.format(
            title=self.title, duration=self.duration, requester=self.requester
        )


class QueueSummary(BaseModel):
    """Now playing plus up to ``limit`` upcoming songs, numbered from 2."""

    model_config = ConfigDict(frozen=True)

    guild_id: int
    now_playing: SongEntry | None = None
    up_next: list[SongEntry] = Field(default_factory=list)
    thumbnail_url: str | None = None
    loop_mode: LoopMode = LoopMode.OFF
    total_pending: NonNegativeInt = 0

    @classmethod
    def from_queue(cls, queue: GuildQueue, limit: int = DEFAULT_UPCOMING_LIMIT) -> QueueSummary:
        head = queue.head
        thumbnail = None
        if head is not None and head.video_id is not None:
            thumbnail = head.video_id.thumbnail_url

        return cls(
            guild_id=queue.guild_id,
            now_playing=SongEntry.from_song(head, 1) if head is not None else None,
            up_next=[
                SongEntry.from_song(song, index + 2)
                for index, song in enumerate(queue.upcoming(limit))
            ],
            thumbnail_url=thumbnail,
            loop_mode=queue.loop_mode,
            total_pending=len(queue.pending),
        )

    def render_description(self) -> str:
        lines = [DiscordUIMessages.EMBED_NOW_PLAYING_HEADER]
        if self.now_playing is not None:
            lines.append(self.now_playing.line)
        lines.append("")
        lines.append(DiscordUIMessages.EMBED_UP_NEXT_HEADER)

        if self.up_next:
            lines.extend(
                DiscordUIMessages.EMBED_QUEUE_ENTRY.format(position=entry.position, line=entry.line)
                for entry in self.up_next
            )
        else:
            lines.append(DiscordUIMessages.EMBED_NO_MORE_SONGS)

        return "\n".join(lines)
