"""
Application Commands (CQRS Write Side)

Command objects and their handlers for write operations.
Commands represent intent to change the system state.
"""

from discord_jukebox.application.commands.base import (
    CommandResult,
    CommandStatus,
    GuildCommand,
)
from discord_jukebox.application.commands.pause_resume import (
    PauseCommand,
    PausePlaybackHandler,
    ResumeCommand,
    ResumePlaybackHandler,
)
from discord_jukebox.application.commands.play_song import PlayCommand, PlaySongHandler
from discord_jukebox.application.commands.set_loop_mode import LoopCommand, SetLoopModeHandler
from discord_jukebox.application.commands.skip_song import SkipCommand, SkipSongHandler
from discord_jukebox.application.commands.stop_playback import StopCommand, StopPlaybackHandler

__all__ = [
    # Results
    "CommandResult",
    "CommandStatus",
    "GuildCommand",
    # Play
    "PlayCommand",
    "PlaySongHandler",
    # Skip
    "SkipCommand",
    "SkipSongHandler",
    # Pause / resume
    "PauseCommand",
    "PausePlaybackHandler",
    "ResumeCommand",
    "ResumePlaybackHandler",
    # Stop
    "StopCommand",
    "StopPlaybackHandler",
    # Loop
    "LoopCommand",
    "SetLoopModeHandler",
]
