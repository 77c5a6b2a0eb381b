"""
Shared Domain Kernel

Contains types, events and exceptions shared across the ledger.
"""

from sentiment_ledger.domain.shared.exceptions import (
    AlreadyVotedError,
    DomainError,
    SentimentOutOfRangeError,
    UnauthorizedError,
    VotingClosedError,
)

__all__ = [
    "DomainError",
    "UnauthorizedError",
    "VotingClosedError",
    "SentimentOutOfRangeError",
    "AlreadyVotedError",
]
