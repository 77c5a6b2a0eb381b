"""Core domain entities for the voting bounded context."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, PrivateAttr

from sentiment_ledger.domain.shared.exceptions import (
    AlreadyVotedError,
    UnauthorizedError,
    VotingClosedError,
)
from sentiment_ledger.domain.shared.types import Identity, NonNegativeInt, SentimentScore
from sentiment_ledger.domain.voting.services import VotingDomainService
from sentiment_ledger.domain.voting.value_objects import (
    SessionStatus,
    VoteCounts,
    VoteOption,
    VotingResult,
)


class VotingSession(BaseModel):
    """Aggregate owning the single proposal's voting state.

    The administrator starts unclaimed (``None``) and is fixed by the first
    successful claim. ``start_voting`` re-initialises the counters and the
    sentiment score but never the set of identities that have voted, so an
    identity can vote at most once for the lifetime of this object.

    Every mutating method performs all of its checks before touching any
    field, so a rejected call leaves the session unchanged. The aggregate
    is not thread-safe on its own; callers serialise access.
    """

    model_config = ConfigDict(validate_assignment=True)

    proposal_text: str = ""
    voting_open: bool = False
    positive_votes: NonNegativeInt = 0
    negative_votes: NonNegativeInt = 0
    neutral_votes: NonNegativeInt = 0
    sentiment_score: SentimentScore = 0
    administrator: Identity | None = None
    _voted_addresses: set[str] = PrivateAttr(default_factory=set)

    @classmethod
    def from_state(
        cls, *, voted_addresses: Iterable[str] = (), **fields: object
    ) -> VotingSession:
        """Rebuild a session from stored field values and its voted-address set."""
        session = cls.model_validate(fields)
        session._voted_addresses = set(voted_addresses)
        return session

    # === Read side ===

    @property
    def voted_addresses(self) -> frozenset[str]:
        return frozenset(self._voted_addresses)

    @property
    def has_administrator(self) -> bool:
        return self.administrator is not None

    def is_administrator(self, caller: str) -> bool:
        return self.administrator is not None and self.administrator == caller

    def has_voted(self, identity: str) -> bool:
        return identity in self._voted_addresses

    def vote_counts(self) -> VoteCounts:
        return VoteCounts(
            positive=self.positive_votes,
            negative=self.negative_votes,
            neutral=self.neutral_votes,
        )

    def status(self) -> SessionStatus:
        return SessionStatus(
            proposal_text=self.proposal_text,
            voting_open=self.voting_open,
            sentiment_score=self.sentiment_score,
            administrator=self.administrator,
            counts=self.vote_counts(),
            voter_count=len(self._voted_addresses),
        )

    # === Guards ===

    def _require_administrator(self, caller: str, operation: str) -> None:
        if not self.is_administrator(caller):
            raise UnauthorizedError(operation, caller)

    def _require_open(self, operation: str) -> None:
        if not self.voting_open:
            raise VotingClosedError(operation)

    # === Lifecycle ===

    def claim_administrator(self, caller: str) -> bool:
        """Claim the administrator role. Returns True if this call won the claim.

        Later claims are silent no-ops.
        """
        if self.administrator is not None:
            return False
        self.administrator = caller
        return True

    def start_voting(self, caller: str, proposal_text: str) -> None:
        """Open a new session on ``proposal_text``, resetting counters and sentiment."""
        self._require_administrator(caller, "start_voting")

        self.positive_votes = 0
        self.negative_votes = 0
        self.neutral_votes = 0
        self.sentiment_score = 0
        self.proposal_text = proposal_text
        self.voting_open = True

    def update_sentiment(self, caller: str, new_score: int) -> None:
        self._require_administrator(caller, "update_sentiment")
        self._require_open("update_sentiment")
        VotingDomainService.validate_sentiment(new_score)

        self.sentiment_score = new_score

    def cast_vote(self, caller: str, option: VoteOption) -> None:
        self._require_open("cast_vote")
        if self.has_voted(caller):
            raise AlreadyVotedError(caller)

        self._voted_addresses.add(caller)
        match option:
            case VoteOption.POSITIVE:
                self.positive_votes += 1
            case VoteOption.NEGATIVE:
                self.negative_votes += 1
            case _:
                self.neutral_votes += 1

    def end_voting(self, caller: str) -> VotingResult:
        """Close the session and return the sentiment-weighted result."""
        self._require_administrator(caller, "end_voting")
        self._require_open("end_voting")

        result = VotingDomainService.compute_result(self.vote_counts(), self.sentiment_score)
        self.voting_open = False
        return result

    # === Snapshots ===

    def copy_state(self) -> VotingSession:
        """Return an independent copy including the voted-address set."""
        return VotingSession.from_state(
            voted_addresses=self._voted_addresses, **self.model_dump()
        )
