#!/usr/bin/env python3
"""Main entry point for the sentiment voting ledger bot."""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from sentiment_ledger.domain.shared.messages import ErrorMessages, LogTemplates
from sentiment_ledger.utils.logging import LOG_DATE_FORMAT, LOG_FORMAT, build_console_handler

if TYPE_CHECKING:
    from sentiment_ledger.config.settings import Settings

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.warning(
            "Could not load %s, falling back to basic config", _LOGGING_CONFIG_PATH
        )
        logging.basicConfig(
            level=resolved_level,
            format=LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            handlers=[build_console_handler()],
            force=True,
        )

    logging.getLogger().setLevel(resolved_level)


def _log_ledger_configuration(settings: Settings) -> None:
    logger = logging.getLogger(__name__)

    if settings.voting.persist_state:
        logger.info(LogTemplates.LEDGER_PERSISTENCE_MODE, settings.database.url)
    else:
        logger.info(LogTemplates.LEDGER_PERSISTENCE_MODE, "disabled (in-memory only)")

    if settings.voting.announce_channel_id is not None:
        logger.info(LogTemplates.LEDGER_ANNOUNCE_CHANNEL, settings.voting.announce_channel_id)


def main() -> int:
    from sentiment_ledger.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)

    token_value = settings.discord.token.get_secret_value()
    if not token_value:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return 1

    logger.info(LogTemplates.LEDGER_STARTING, settings.environment)
    _log_ledger_configuration(settings)

    from sentiment_ledger.config.container import create_container
    from sentiment_ledger.infrastructure.discord.bot import create_bot

    container = create_container(settings)
    bot = create_bot(container, settings)

    try:
        logger.info(LogTemplates.BOT_STARTING_RUN)
        bot.run_with_graceful_shutdown(token_value)
        logger.info(LogTemplates.BOT_STOPPED)
        return 0
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return 1


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
