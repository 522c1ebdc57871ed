"""Shared validators for domain models and settings."""

from discord_jukebox.domain.shared.messages import ErrorMessages


def validate_discord_snowflake(value: int) -> int:
    """Validate a Discord snowflake ID.

    Discord snowflake IDs are 64-bit unsigned integers representing unique
    identifiers for users, guilds, channels, messages, etc.

    Args:
        value: The snowflake ID to validate.

    Returns:
        The validated snowflake ID.

    Raises:
        ValueError: If the snowflake ID is invalid.
    """
    if value <= 0:
        raise ValueError(ErrorMessages.INVALID_SNOWFLAKE)
    if value >= 2**64:
        raise ValueError(ErrorMessages.SNOWFLAKE_TOO_LARGE)
    return value


def validate_non_empty_string(value: str, field_name: str = "value") -> str:
    """Validate that a string is not empty or whitespace-only.

    Raises:
        ValueError: If the string is empty or whitespace-only.
    """
    if not value or not value.strip():
        raise ValueError(ErrorMessages.FIELD_CANNOT_BE_EMPTY.format(field_name=field_name))
    return value
