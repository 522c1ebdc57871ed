"""Console entry point: load settings, configure logging and run the bot."""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from discord_jukebox.config.settings import DEFAULT_LOGGING_CONFIG
from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from discord_jukebox.config.settings import Settings

logger = logging.getLogger(__name__)

FALLBACK_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(log_level: str = "INFO", config_path: Path = DEFAULT_LOGGING_CONFIG) -> None:
    """Apply the dictConfig stored at *config_path*, or plain stderr logging if it is unusable.

    *log_level* overrides whatever root level the file sets.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    try:
        logging.config.dictConfig(json.loads(config_path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        logging.basicConfig(level=level, format=FALLBACK_FORMAT)
        logger.warning("Could not load %s (%s), using basic logging", config_path, exc)

    logging.getLogger().setLevel(level)


def _run(settings: Settings) -> int:
    token = settings.discord.token.get_secret_value()
    if not token:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return 1

    from discord_jukebox.config.container import create_container
    from discord_jukebox.infrastructure.discord.bot import create_bot

    bot = create_bot(create_container(settings), settings)

    logger.info(LogTemplates.BOT_STARTING_RUN)
    bot.run_with_graceful_shutdown(token)
    logger.info(LogTemplates.BOT_STOPPED)
    return 0


def main() -> int:
    from discord_jukebox.config.settings import get_settings

    settings = get_settings()
    setup_logging("DEBUG" if settings.debug else settings.log_level, settings.logging_config)
    logger.info(LogTemplates.BOT_STARTING.format(environment=settings.environment))

    try:
        return _run(settings)
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return 1


def cli() -> None:
    sys.exit(main())
