"""Post proposal and result announcements to a configured Discord channel."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord

from ....domain.shared.events import (
    DomainEvent,
    EventBus,
    ProposalSet,
    VotingEnded,
    get_event_bus,
)
from ....domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from discord.ext.commands import Bot

logger = logging.getLogger(__name__)


class LedgerAnnouncer:
    """Forwards ``ProposalSet`` and ``VotingEnded`` to a text channel.

    The bus calls handlers synchronously, so sending is scheduled on the
    running event loop and never blocks or fails the ledger operation.
    """

    def __init__(self, bot: Bot, channel_id: int, event_bus: EventBus | None = None) -> None:
        self._bot = bot
        self._channel_id = channel_id
        self._bus = event_bus if event_bus is not None else get_event_bus()
        self._tasks: set[asyncio.Task[None]] = set()
        self._started = False

    def start(self) -> None:
        if self._started:
            return
        self._bus.subscribe(ProposalSet, self._on_proposal_set)
        self._bus.subscribe(VotingEnded, self._on_voting_ended)
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        self._bus.unsubscribe(ProposalSet, self._on_proposal_set)
        self._bus.unsubscribe(VotingEnded, self._on_voting_ended)
        self._started = False

    @staticmethod
    def format_event(event: DomainEvent) -> str | None:
        if isinstance(event, ProposalSet):
            return DiscordUIMessages.ANNOUNCE_PROPOSAL_SET.format(proposal=event.proposal_text)
        if isinstance(event, VotingEnded):
            return DiscordUIMessages.ANNOUNCE_VOTING_ENDED.format(
                outcome=event.outcome.label,
                positive_tally=event.final_positive_tally,
                negative_tally=event.final_negative_tally,
            )
        return None

    def _on_proposal_set(self, event: ProposalSet) -> None:
        self._schedule(event)

    def _on_voting_ended(self, event: VotingEnded) -> None:
        self._schedule(event)

    def _schedule(self, event: DomainEvent) -> None:
        message = self.format_event(event)
        if message is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop; skipping announcement of %s", type(event).__name__)
            return
        task = loop.create_task(self._send(type(event).__name__, message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _send(self, event_name: str, message: str) -> None:
        channel = self._bot.get_channel(self._channel_id)
        if not isinstance(channel, discord.abc.Messageable):
            logger.warning(LogTemplates.EVENT_ANNOUNCE_FAILED, event_name, "channel not found")
            return
        try:
            await channel.send(message)
        except discord.HTTPException as e:
            logger.warning(LogTemplates.EVENT_ANNOUNCE_FAILED, event_name, e)
