"""
Tests for the queue read models

Tests for:
- SongEntry line rendering
- QueueSummary numbering, limits and thumbnails
- Embed building from a summary
"""

import discord

from discord_jukebox.application.services.queue_models import QueueSummary, SongEntry
from discord_jukebox.domain.music.entities import Song
from discord_jukebox.domain.music.value_objects import LoopMode
from discord_jukebox.infrastructure.discord.embeds import MAX_DESCRIPTION_LENGTH, build_queue_embed
from fakes import USER_ID, make_song


class TestSongEntry:
    def test_line(self, sample_song):
        entry = SongEntry.from_song(sample_song.with_requester(USER_ID), position=1)

        assert entry.line == f"sample | 3:33 | Requested by <@{USER_ID}>"

    def test_unknown_duration(self):
        entry = SongEntry.from_song(make_song("x", duration=None), position=2)

        assert entry.duration == "N/A"


class TestQueueSummary:
    """Unit tests for QueueSummary.from_queue and rendering."""

    def test_positions_start_at_two(self, queue):
        for name in ("A", "B", "C"):
            queue.add(make_song(name))

        summary = QueueSummary.from_queue(queue)

        assert summary.now_playing.title == "A"
        assert [(e.position, e.title) for e in summary.up_next] == [(2, "B"), (3, "C")]
        assert summary.total_pending == 3

    def test_up_next_limited(self, queue):
        for index in range(15):
            queue.add(make_song(f"s{index}"))

        summary = QueueSummary.from_queue(queue, limit=10)

        assert len(summary.up_next) == 10
        assert summary.up_next[-1].position == 11
        assert summary.total_pending == 15

    def test_thumbnail_from_youtube_locator(self, queue):
        queue.add(Song(title="Video", locator="https://youtu.be/dQw4w9WgXcQ"))

        summary = QueueSummary.from_queue(queue)

        assert summary.thumbnail_url == "https://img.youtube.com/vi/dQw4w9WgXcQ/hqdefault.jpg"

    def test_no_thumbnail_for_other_hosts(self, queue):
        queue.add(Song(title="Track", locator="https://soundcloud.com/artist/track"))

        assert QueueSummary.from_queue(queue).thumbnail_url is None

    def test_carries_loop_mode(self, queue):
        queue.add(make_song("A"))
        queue.loop_mode = LoopMode.SONG

        assert QueueSummary.from_queue(queue).loop_mode is LoopMode.SONG

    def test_render_description(self, queue):
        queue.add(make_song("A").with_requester(USER_ID))
        queue.add(make_song("B", duration=None).with_requester(USER_ID))

        description = QueueSummary.from_queue(queue).render_description()

        assert description == (
            "**Now Playing:**\n"
            f"A | 3:00 | Requested by <@{USER_ID}>\n"
            "\n"
            "**Up Next:**\n"
            f"**2.** B | N/A | Requested by <@{USER_ID}>"
        )

    def test_render_with_nothing_up_next(self, queue):
        queue.add(make_song("A"))

        description = QueueSummary.from_queue(queue).render_description()

        assert description.endswith("**Up Next:**\nNo more songs in queue")


class TestBuildQueueEmbed:
    def test_embed_fields(self, queue):
        queue.add(Song(title="Video", locator="https://youtu.be/dQw4w9WgXcQ"))
        summary = QueueSummary.from_queue(queue)

        embed = build_queue_embed(summary)

        assert isinstance(embed, discord.Embed)
        assert embed.title == "🎶 Music Queue"
        assert embed.description == summary.render_description()
        assert embed.thumbnail.url == summary.thumbnail_url

    def test_embed_without_thumbnail(self, queue):
        queue.add(Song(title="Track", locator="https://soundcloud.com/artist/track"))

        embed = build_queue_embed(QueueSummary.from_queue(queue))

        assert embed.thumbnail.url is None

    def test_long_description_truncated(self, queue):
        for index in range(25):
            queue.add(make_song(f"s{index}").model_copy(update={"title": "x" * 400}))

        embed = build_queue_embed(QueueSummary.from_queue(queue, limit=25))

        assert len(embed.description) <= MAX_DESCRIPTION_LENGTH
