"""Voting Ledger - the serialised owner of the voting session."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from ...domain.shared.events import (
    EventBus,
    ProposalSet,
    SentimentUpdated,
    VoteCast,
    VotingEnded,
    get_event_bus,
)
from ...domain.shared.exceptions import DomainError
from ...domain.shared.messages import LogTemplates
from ...domain.voting.entities import VotingSession
from ...domain.voting.value_objects import SessionStatus, VoteCounts, VoteOption, VotingResult

logger = logging.getLogger(__name__)


class VotingLedger:
    """Owns one ``VotingSession`` and serialises every operation on it.

    All mutations and reads run under a single re-entrant lock, so no two
    mutations interleave and reads always observe a fully applied state.
    Events are published on the bus while the lock is held, after the
    mutation succeeded, so subscribers see them in mutation order. A
    subscriber may read from the ledger but must not mutate it.
    """

    def __init__(
        self,
        session: VotingSession | None = None,
        *,
        event_bus: EventBus | None = None,
    ) -> None:
        self._session = session if session is not None else VotingSession()
        self._bus = event_bus if event_bus is not None else get_event_bus()
        self._lock = threading.RLock()

    @contextmanager
    def _guard(self, operation: str, caller: str) -> Iterator[None]:
        with self._lock:
            try:
                yield
            except DomainError as e:
                logger.info(LogTemplates.OPERATION_REJECTED, operation, caller, e.code)
                raise

    # === Mutations ===

    def claim_administrator(self, caller: str) -> bool:
        with self._guard("claim_administrator", caller):
            claimed = self._session.claim_administrator(caller)
            if claimed:
                logger.info(LogTemplates.ADMIN_CLAIMED, caller)
            else:
                logger.debug(
                    LogTemplates.ADMIN_CLAIM_IGNORED, caller, self._session.administrator
                )
            return claimed

    def start_voting(self, caller: str, proposal_text: str) -> None:
        with self._guard("start_voting", caller):
            self._session.start_voting(caller, proposal_text)
            logger.info(LogTemplates.VOTING_STARTED, caller, proposal_text)
            self._bus.publish(ProposalSet(proposal_text=proposal_text))

    def update_sentiment(self, caller: str, new_score: int) -> None:
        with self._guard("update_sentiment", caller):
            self._session.update_sentiment(caller, new_score)
            logger.info(LogTemplates.SENTIMENT_UPDATED, new_score, caller)
            self._bus.publish(SentimentUpdated(sentiment_score=new_score))

    def cast_vote(self, caller: str, option: VoteOption) -> None:
        with self._guard("cast_vote", caller):
            self._session.cast_vote(caller, option)
            logger.info(LogTemplates.VOTE_CAST, option.label, caller)
            self._bus.publish(VoteCast(voter=caller, option=option))

    def end_voting(self, caller: str) -> VotingResult:
        with self._guard("end_voting", caller):
            result = self._session.end_voting(caller)
            logger.info(
                LogTemplates.VOTING_ENDED,
                caller,
                result.final_positive_tally,
                result.final_negative_tally,
                result.outcome.label,
            )
            self._bus.publish(
                VotingEnded(
                    final_positive_tally=result.final_positive_tally,
                    final_negative_tally=result.final_negative_tally,
                    outcome=result.outcome,
                )
            )
            return result

    # === Reads ===

    def get_vote_counts(self) -> VoteCounts:
        with self._lock:
            return self._session.vote_counts()

    def get_status(self) -> SessionStatus:
        with self._lock:
            return self._session.status()

    def has_voted(self, identity: str) -> bool:
        with self._lock:
            return self._session.has_voted(identity)

    def snapshot(self) -> VotingSession:
        """Return an independent copy of the full session state."""
        with self._lock:
            return self._session.copy_state()

    # === State replacement ===

    def restore(self, session: VotingSession) -> None:
        """Replace the owned session, e.g. with state loaded from storage."""
        with self._lock:
            self._session = session.copy_state()
