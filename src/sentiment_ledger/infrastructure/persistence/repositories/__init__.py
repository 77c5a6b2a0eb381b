"""SQLite repository implementations."""

from sentiment_ledger.infrastructure.persistence.repositories.session_repository import (
    SQLiteVotingSessionRepository,
)

__all__ = [
    "SQLiteVotingSessionRepository",
]
