"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the package is defined here once,
so models can simply annotate their fields::

    from discord_jukebox.domain.shared.types import DiscordSnowflake, NonEmptyStr

    class MyModel(BaseModel):
        guild_id: DiscordSnowflake
        name: NonEmptyStr
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

DiscordSnowflake = Annotated[int, Field(gt=0, lt=2**64)]
"""Positive integer that fits a Discord snowflake (1 … 2^64-1)."""

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""

NonNegativeFloat = Annotated[float, Field(ge=0.0)]
"""Float >= 0.0."""

VolumeFloat = Annotated[float, Field(ge=0.0, le=2.0)]
"""Audio volume multiplier in [0.0, 2.0]."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

SongTitleStr = Annotated[str, Field(min_length=1, max_length=500)]
"""Song title: 1-500 characters."""

HttpUrlStr = Annotated[str, Field(pattern=r"^https?://")]
"""String that starts with http:// or https://."""


# ── Settings-specific constraints ──────────────────────────────────

TimeoutSeconds = Annotated[float, Field(gt=0.0, le=120.0)]
"""Network timeout in seconds: (0, 120]."""

FailureLimit = Annotated[int, Field(ge=1, le=20)]
"""Consecutive failure cap: 1 … 20."""

PageSize = Annotated[int, Field(ge=1, le=25)]
"""Number of upcoming entries shown in a summary: 1 … 25."""


# ── Pydantic-compatible ID aliases ─────────────────────────────

ChannelIdField = DiscordSnowflake
"""Channel ID used as a plain Pydantic field."""
