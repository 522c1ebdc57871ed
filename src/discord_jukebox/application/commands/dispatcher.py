"""Routes each music command to its handler."""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from ..queries.show_queue import ShowQueueQuery
from .pause_resume import PauseCommand, ResumeCommand
from .play_song import PlayCommand
from .set_loop_mode import LoopCommand
from .skip_song import SkipCommand
from .stop_playback import StopCommand

if TYPE_CHECKING:
    from ..queries.show_queue import ShowQueueHandler
    from .base import CommandResult
    from .pause_resume import PausePlaybackHandler, ResumePlaybackHandler
    from .play_song import PlaySongHandler
    from .set_loop_mode import SetLoopModeHandler
    from .skip_song import SkipSongHandler
    from .stop_playback import StopPlaybackHandler

MusicCommand = (
    PlayCommand
    | SkipCommand
    | PauseCommand
    | ResumeCommand
    | StopCommand
    | LoopCommand
    | ShowQueueQuery
)


class MusicCommandDispatcher:
    """Single entry point the Discord layer uses to run a music command."""

    def __init__(
        self,
        *,
        play: PlaySongHandler,
        skip: SkipSongHandler,
        pause: PausePlaybackHandler,
        resume: ResumePlaybackHandler,
        stop: StopPlaybackHandler,
        loop: SetLoopModeHandler,
        show_queue: ShowQueueHandler,
    ) -> None:
        self._play = play
        self._skip = skip
        self._pause = pause
        self._resume = resume
        self._stop = stop
        self._loop = loop
        self._show_queue = show_queue

    async def dispatch(self, command: MusicCommand) -> CommandResult:
        match command:
            case PlayCommand():
                return await self._play.handle(command)
            case SkipCommand():
                return await self._skip.handle(command)
            case PauseCommand():
                return await self._pause.handle(command)
            case ResumeCommand():
                return await self._resume.handle(command)
            case StopCommand():
                return await self._stop.handle(command)
            case LoopCommand():
                return await self._loop.handle(command)
            case ShowQueueQuery():
                return await self._show_queue.handle(command)
            case _:
                assert_never(command)
