"""
Voting Bounded Context

Domain logic for the single-proposal, sentiment-weighted voting session.
"""

from sentiment_ledger.domain.voting.entities import VotingSession
from sentiment_ledger.domain.voting.repository import VotingSessionRepository
from sentiment_ledger.domain.voting.services import VotingDomainService
from sentiment_ledger.domain.voting.value_objects import (
    Outcome,
    SessionStatus,
    VoteCounts,
    VoteOption,
    VotingResult,
)

__all__ = [
    # Entities
    "VotingSession",
    # Value Objects
    "VoteOption",
    "Outcome",
    "VoteCounts",
    "VotingResult",
    "SessionStatus",
    # Repository
    "VotingSessionRepository",
    # Services
    "VotingDomainService",
]
