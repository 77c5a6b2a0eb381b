"""
Voting Domain Services

Domain services containing the sentiment-weighting business rules.
"""

from sentiment_ledger.domain.shared.exceptions import SentimentOutOfRangeError
from sentiment_ledger.domain.shared.types import SENTIMENT_MAX, SENTIMENT_MIN
from sentiment_ledger.domain.voting.value_objects import Outcome, VoteCounts, VotingResult


class VotingDomainService:
    """Domain service for sentiment-weighted tallying.

    The sentiment score shifts weight between the two sides: a positive
    score makes each positive vote count for more and each negative vote
    for less, and vice versa. Neutral votes never contribute to a tally.
    """

    # Configuration constants
    WEIGHT_BASE = 1000
    SENTIMENT_MIN = SENTIMENT_MIN
    SENTIMENT_MAX = SENTIMENT_MAX

    @classmethod
    def validate_sentiment(cls, score: int) -> int:
        """Ensure a sentiment score is within the accepted range.

        Args:
            score: The proposed sentiment score.

        Returns:
            The score, unchanged.

        Raises:
            SentimentOutOfRangeError: If the score is outside [-100, 100].
        """
        if not cls.SENTIMENT_MIN <= score <= cls.SENTIMENT_MAX:
            raise SentimentOutOfRangeError(score, cls.SENTIMENT_MIN, cls.SENTIMENT_MAX)
        return score

    @classmethod
    def positive_weight(cls, sentiment_score: int) -> int:
        return cls.WEIGHT_BASE + sentiment_score

    @classmethod
    def negative_weight(cls, sentiment_score: int) -> int:
        return cls.WEIGHT_BASE - sentiment_score

    @staticmethod
    def decide_outcome(final_positive_tally: int, final_negative_tally: int) -> Outcome:
        """Compare the weighted tallies. Equal tallies (including 0 vs 0) tie."""
        if final_positive_tally > final_negative_tally:
            return Outcome.PASSED
        if final_negative_tally > final_positive_tally:
            return Outcome.FAILED
        return Outcome.TIE

    @classmethod
    def compute_result(cls, counts: VoteCounts, sentiment_score: int) -> VotingResult:
        """Compute the sentiment-weighted result for a set of raw counts.

        Python integers are arbitrary precision, so the products below are
        exact for any vote count and never wrap.

        Args:
            counts: The raw vote counters.
            sentiment_score: The session's sentiment score.

        Returns:
            The weights, weighted tallies and outcome.
        """
        cls.validate_sentiment(sentiment_score)

        positive_weight = cls.positive_weight(sentiment_score)
        negative_weight = cls.negative_weight(sentiment_score)
        final_positive_tally = counts.positive * positive_weight
        final_negative_tally = counts.negative * negative_weight

        return VotingResult(
            counts=counts,
            sentiment_score=sentiment_score,
            positive_weight=positive_weight,
            negative_weight=negative_weight,
            final_positive_tally=final_positive_tally,
            final_negative_tally=final_negative_tally,
            outcome=cls.decide_outcome(final_positive_tally, final_negative_tally),
        )
