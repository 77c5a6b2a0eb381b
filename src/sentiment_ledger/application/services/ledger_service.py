"""Ledger Application Service - runs ledger operations and persists the result."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...domain.voting.repository import VotingSessionRepository
    from ...domain.voting.value_objects import (
        SessionStatus,
        VoteCounts,
        VoteOption,
        VotingResult,
    )
    from .voting_ledger import VotingLedger

logger = logging.getLogger(__name__)


class LedgerApplicationService:
    """Host-facing facade over the ``VotingLedger``.

    When a repository is configured, every successful mutation is followed by
    a save of the full session snapshot. Mutate-then-save pairs are serialised
    with an ``asyncio.Lock`` so snapshots reach storage in mutation order.
    Rejected operations raise their ``DomainError`` and persist nothing. A
    failed save is logged and the operation still returns its normal result,
    because the mutation has already been applied in memory.
    """

    def __init__(
        self,
        *,
        ledger: VotingLedger,
        repository: VotingSessionRepository | None = None,
    ) -> None:
        self._ledger = ledger
        self._repository = repository
        self._lock = asyncio.Lock()

    @property
    def ledger(self) -> VotingLedger:
        return self._ledger

    @property
    def persistence_enabled(self) -> bool:
        return self._repository is not None

    async def restore(self) -> bool:
        """Load persisted state into the ledger. Returns True if state was found."""
        if self._repository is None:
            return False

        async with self._lock:
            session = await self._repository.load()
            if session is None:
                logger.info(LogTemplates.LEDGER_STATE_EMPTY)
                return False
            self._ledger.restore(session)

        logger.info(LogTemplates.LEDGER_RESTORED)
        return True

    async def _persist(self, operation: str) -> None:
        if self._repository is None:
            return
        try:
            await self._repository.save(self._ledger.snapshot())
        except Exception as e:
            # The mutation is already applied and published; the next
            # successful save writes the full snapshot again.
            logger.error(LogTemplates.LEDGER_STATE_SAVE_FAILED, operation, e)

    # === Mutations ===

    async def claim_administrator(self, caller: str) -> bool:
        async with self._lock:
            claimed = self._ledger.claim_administrator(caller)
            if claimed:
                await self._persist("claim_administrator")
            return claimed

    async def start_voting(self, caller: str, proposal_text: str) -> None:
        async with self._lock:
            self._ledger.start_voting(caller, proposal_text)
            await self._persist("start_voting")

    async def update_sentiment(self, caller: str, new_score: int) -> None:
        async with self._lock:
            self._ledger.update_sentiment(caller, new_score)
            await self._persist("update_sentiment")

    async def cast_vote(self, caller: str, option: VoteOption) -> None:
        async with self._lock:
            self._ledger.cast_vote(caller, option)
            await self._persist("cast_vote")

    async def end_voting(self, caller: str) -> VotingResult:
        async with self._lock:
            result = self._ledger.end_voting(caller)
            await self._persist("end_voting")
            return result

    # === Reads ===

    def get_vote_counts(self) -> VoteCounts:
        return self._ledger.get_vote_counts()

    def get_status(self) -> SessionStatus:
        return self._ledger.get_status()

    def has_voted(self, identity: str) -> bool:
        return self._ledger.has_voted(identity)
