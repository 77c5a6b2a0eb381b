"""
Voting Domain Value Objects

Immutable value objects for the voting bounded context.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from sentiment_ledger.domain.shared.types import (
    Identity,
    NonNegativeInt,
    SentimentScore,
    VoteWeight,
)


class VoteOption(Enum):
    """Options a voter can choose from."""

    NEGATIVE = 0
    NEUTRAL = 1
    POSITIVE = 2

    @property
    def label(self) -> str:
        """Get the display label."""
        return self.name.capitalize()

    @classmethod
    def from_label(cls, value: str) -> VoteOption:
        """Parse a case-insensitive option name such as ``"positive"``."""
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown vote option: {value!r}") from None


class Outcome(Enum):
    """Result of a finished voting session. Derived, never stored."""

    PASSED = "passed"
    FAILED = "failed"
    TIE = "tie"

    @property
    def label(self) -> str:
        return {
            Outcome.PASSED: "Passed",
            Outcome.FAILED: "Failed",
            Outcome.TIE: "Tie",
        }[self]


class VoteCounts(BaseModel):
    """Raw (unweighted) vote counters."""

    model_config = ConfigDict(frozen=True)

    positive: NonNegativeInt = 0
    negative: NonNegativeInt = 0
    neutral: NonNegativeInt = 0

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral


class VotingResult(BaseModel):
    """Sentiment-weighted result computed when a session ends."""

    model_config = ConfigDict(frozen=True)

    counts: VoteCounts
    sentiment_score: SentimentScore
    positive_weight: VoteWeight
    negative_weight: VoteWeight
    final_positive_tally: NonNegativeInt
    final_negative_tally: NonNegativeInt
    outcome: Outcome


class SessionStatus(BaseModel):
    """Read-only snapshot of the whole voting session."""

    model_config = ConfigDict(frozen=True)

    proposal_text: str
    voting_open: bool
    sentiment_score: SentimentScore
    administrator: Identity | None
    counts: VoteCounts
    voter_count: NonNegativeInt
