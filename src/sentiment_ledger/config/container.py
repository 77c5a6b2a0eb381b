"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the ledger, its persistence and its subscribers.
Components are created on-demand and cached for reuse throughout the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.services.ledger_service import LedgerApplicationService
    from ..application.services.voting_ledger import VotingLedger
    from ..domain.shared.events import EventBus
    from ..domain.voting.repository import VotingSessionRepository
    from ..infrastructure.discord.services.announcer import LedgerAnnouncer
    from ..infrastructure.monitoring.event_logger import LedgerEventLogger
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    This container manages all application dependencies and their lifecycle.
    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    # Persistence layer
    _database: Database | None = None
    _session_repository: VotingSessionRepository | None = None

    # Core
    _event_bus: EventBus | None = None
    _voting_ledger: VotingLedger | None = None
    _ledger_service: LedgerApplicationService | None = None

    # Event subscribers
    _event_logger: LedgerEventLogger | None = None
    _announcer: LedgerAnnouncer | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    # === Repositories ===

    @property
    def session_repository(self) -> VotingSessionRepository:
        """Get the voting session repository."""
        if self._session_repository is None:
            from ..infrastructure.persistence.repositories.session_repository import (
                SQLiteVotingSessionRepository,
            )

            self._session_repository = SQLiteVotingSessionRepository(self.database)
        return self._session_repository

    # === Core ===

    @property
    def event_bus(self) -> EventBus:
        """Get the event bus shared by the ledger and its subscribers."""
        if self._event_bus is None:
            from ..domain.shared.events import get_event_bus

            self._event_bus = get_event_bus()
        return self._event_bus

    @property
    def voting_ledger(self) -> VotingLedger:
        """Get the voting ledger owning the session."""
        if self._voting_ledger is None:
            from ..application.services.voting_ledger import VotingLedger

            self._voting_ledger = VotingLedger(event_bus=self.event_bus)
        return self._voting_ledger

    @property
    def ledger_service(self) -> LedgerApplicationService:
        """Get the ledger application service."""
        if self._ledger_service is None:
            from ..application.services.ledger_service import LedgerApplicationService

            repository = self.session_repository if self.settings.voting.persist_state else None
            self._ledger_service = LedgerApplicationService(
                ledger=self.voting_ledger,
                repository=repository,
            )
        return self._ledger_service

    # === Event Subscribers ===

    @property
    def event_logger(self) -> LedgerEventLogger:
        """Get the monitoring subscriber that logs ledger events."""
        if self._event_logger is None:
            from ..infrastructure.monitoring.event_logger import LedgerEventLogger

            self._event_logger = LedgerEventLogger(self.event_bus)
        return self._event_logger

    @property
    def announcer(self) -> LedgerAnnouncer | None:
        """Get the channel announcer, or None when no channel is configured."""
        channel_id = self.settings.voting.announce_channel_id
        if channel_id is None:
            return None
        if self._announcer is None:
            from ..infrastructure.discord.services.announcer import LedgerAnnouncer

            self._announcer = LedgerAnnouncer(self.bot, channel_id, self.event_bus)
        return self._announcer

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources and restore persisted state."""
        if self.settings.voting.persist_state:
            await self.database.initialize()
            try:
                await self.ledger_service.restore()
            except Exception as exc:
                logger.exception(LogTemplates.LEDGER_RESTORE_FAILED, exc)
                raise

        self.event_logger.start()
        if self._bot is not None and self.announcer is not None:
            self.announcer.start()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._announcer is not None:
            self._announcer.stop()

        if self._event_logger is not None:
            self._event_logger.stop()

        if self._database is not None:
            await self._database.close()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
