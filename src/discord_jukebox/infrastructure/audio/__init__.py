"""Audio infrastructure - yt-dlp resolver, Spotify link translation and FFmpeg player."""

from discord_jukebox.infrastructure.audio.ffmpeg_player import FFmpegAudioPlayer, FFmpegConfig
from discord_jukebox.infrastructure.audio.models import (
    AudioFormatInfo,
    CacheEntry,
    YtDlpOpts,
    YtDlpTrackInfo,
)
from discord_jukebox.infrastructure.audio.spotify_catalog import SpotifyCatalogTranslator
from discord_jukebox.infrastructure.audio.ytdlp_resolver import YtDlpResolver

__all__ = [
    "AudioFormatInfo",
    "CacheEntry",
    "FFmpegAudioPlayer",
    "FFmpegConfig",
    "SpotifyCatalogTranslator",
    "YtDlpOpts",
    "YtDlpResolver",
    "YtDlpTrackInfo",
]
