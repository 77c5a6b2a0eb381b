"""Application services."""

from sentiment_ledger.application.services.ledger_service import LedgerApplicationService
from sentiment_ledger.application.services.voting_ledger import VotingLedger

__all__ = [
    "VotingLedger",
    "LedgerApplicationService",
]
