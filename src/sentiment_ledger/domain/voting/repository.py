"""
Voting Domain Repository Interfaces

Abstract base classes defining the contract for voting session persistence.
"""

from abc import ABC, abstractmethod

from sentiment_ledger.domain.voting.entities import VotingSession


class VotingSessionRepository(ABC):
    """Abstract repository for the ledger's single voting session.

    The stored layout must round-trip every field of ``VotingSession``,
    including the voted-address set that survives re-initialisation.
    """

    @abstractmethod
    async def load(self) -> VotingSession | None:
        """Load the persisted voting session.

        Returns:
            The session if one was saved, None otherwise.
        """
        ...

    @abstractmethod
    async def save(self, session: VotingSession) -> None:
        """Persist the full state of a voting session.

        Args:
            session: The voting session to save.
        """
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Delete all persisted ledger state."""
        ...
