"""Embed builders for queue summaries."""

from __future__ import annotations

import discord

from discord_jukebox.application.services.queue_models import QueueSummary
from discord_jukebox.domain.shared.messages import DiscordUIMessages

# Discord rejects embed descriptions longer than this.
MAX_DESCRIPTION_LENGTH = 4096


def build_queue_embed(summary: QueueSummary) -> discord.Embed:
    """Now-playing and up-next embed, with a random colour and the video thumbnail."""
    description = summary.render_description()
    if len(description) > MAX_DESCRIPTION_LENGTH:
        description = description[: MAX_DESCRIPTION_LENGTH - 1] + "…"

    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_QUEUE_TITLE,
        description=description,
        color=discord.Color.random(),
    )
    if summary.thumbnail_url:
        embed.set_thumbnail(url=summary.thumbnail_url)
    return embed
