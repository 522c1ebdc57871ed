"""Shared command base model, status codes and result type."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.domain.shared.types import DiscordSnowflake

from ..services.queue_models import QueueSummary


class CommandStatus(Enum):
    """Status codes for music command results."""

    SUCCESS = "success"
    NOW_PLAYING = "now_playing"
    QUEUED = "queued"
    NOTHING_PLAYING = "nothing_playing"
    NOT_IN_VOICE = "not_in_voice"
    MISSING_PERMISSIONS = "missing_permissions"
    CATALOG_ERROR = "catalog_error"
    NO_RESULTS = "no_results"
    TRACK_ERROR = "track_error"
    VOICE_ERROR = "voice_error"
    CANCELLED = "cancelled"


class GuildCommand(BaseModel):
    """Fields every guild-scoped music command carries."""

    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake
    user_id: DiscordSnowflake


class CommandResult(BaseModel):
    """Result of a music command: a status, a reply line and an optional summary."""

    model_config = ConfigDict(frozen=True)

    status: CommandStatus
    message: str
    summary: QueueSummary | None = None

    @property
    def is_success(self) -> bool:
        return self.status in {
            CommandStatus.SUCCESS,
            CommandStatus.NOW_PLAYING,
            CommandStatus.QUEUED,
        }

    @classmethod
    def success(
        cls,
        message: str,
        summary: QueueSummary | None = None,
        status: CommandStatus = CommandStatus.SUCCESS,
    ) -> CommandResult:
        return cls(status=status, message=message, summary=summary)

    @classmethod
    def error(cls, status: CommandStatus, message: str) -> CommandResult:
        return cls(status=status, message=message)

    @classmethod
    def nothing_playing(cls) -> CommandResult:
        return cls.error(CommandStatus.NOTHING_PLAYING, DiscordUIMessages.STATE_NOTHING_PLAYING)
