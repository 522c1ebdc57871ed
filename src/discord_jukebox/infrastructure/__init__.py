"""Infrastructure layer: Discord, yt-dlp/FFmpeg audio and in-memory state."""
