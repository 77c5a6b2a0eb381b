"""
Unit Tests for Domain Voting Layer

Tests for:
- Value Objects: VoteOption, Outcome, VoteCounts
- Services: VotingDomainService
- Entities: VotingSession
"""

import pytest
from pydantic import ValidationError

from sentiment_ledger.domain.shared.exceptions import (
    AlreadyVotedError,
    SentimentOutOfRangeError,
    UnauthorizedError,
    VotingClosedError,
)
from sentiment_ledger.domain.voting.entities import VotingSession
from sentiment_ledger.domain.voting.services import VotingDomainService
from sentiment_ledger.domain.voting.value_objects import Outcome, VoteCounts, VoteOption

ADMIN = "0xadmin"
ALICE = "0xalice"
BOB = "0xbob"
CAROL = "0xcarol"

# =============================================================================
# VoteOption Value Object Tests
# =============================================================================


class TestVoteOption:
    """Unit tests for VoteOption enum value object."""

    def test_wire_values(self):
        """Should keep the NEGATIVE/NEUTRAL/POSITIVE numbering."""
        assert VoteOption.NEGATIVE.value == 0
        assert VoteOption.NEUTRAL.value == 1
        assert VoteOption.POSITIVE.value == 2

    def test_label(self):
        assert VoteOption.POSITIVE.label == "Positive"
        assert VoteOption.NEUTRAL.label == "Neutral"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("positive", VoteOption.POSITIVE),
            ("NEGATIVE", VoteOption.NEGATIVE),
            ("  Neutral ", VoteOption.NEUTRAL),
        ],
    )
    def test_from_label(self, raw, expected):
        """Should parse option names case-insensitively."""
        assert VoteOption.from_label(raw) is expected

    def test_from_label_unknown(self):
        with pytest.raises(ValueError, match="Unknown vote option"):
            VoteOption.from_label("abstain")


class TestOutcome:
    def test_labels(self):
        assert Outcome.PASSED.label == "Passed"
        assert Outcome.FAILED.label == "Failed"
        assert Outcome.TIE.label == "Tie"


class TestVoteCounts:
    def test_total(self):
        assert VoteCounts(positive=3, negative=2, neutral=1).total == 6

    def test_defaults_to_zero(self):
        assert VoteCounts().total == 0

    def test_rejects_negative_counts(self):
        with pytest.raises(ValidationError):
            VoteCounts(positive=-1)

    def test_is_frozen(self):
        counts = VoteCounts()
        with pytest.raises(ValidationError):
            counts.positive = 5


# =============================================================================
# VotingDomainService Tests
# =============================================================================


class TestVotingDomainService:
    """Unit tests for sentiment-weighted tallying."""

    def test_weights_at_zero_sentiment(self):
        assert VotingDomainService.positive_weight(0) == 1000
        assert VotingDomainService.negative_weight(0) == 1000

    def test_weights_shift_with_sentiment(self):
        assert VotingDomainService.positive_weight(50) == 1050
        assert VotingDomainService.negative_weight(50) == 950
        assert VotingDomainService.positive_weight(-100) == 900
        assert VotingDomainService.negative_weight(-100) == 1100

    @pytest.mark.parametrize("score", [-100, -1, 0, 1, 100])
    def test_validate_sentiment_accepts_range(self, score):
        assert VotingDomainService.validate_sentiment(score) == score

    @pytest.mark.parametrize("score", [-101, 101, 1000])
    def test_validate_sentiment_rejects_out_of_range(self, score):
        with pytest.raises(SentimentOutOfRangeError) as exc_info:
            VotingDomainService.validate_sentiment(score)

        assert exc_info.value.code == "OUT_OF_RANGE"
        assert exc_info.value.score == score

    def test_weighted_result_passes(self):
        """3 positive and 2 negative at sentiment 50 gives 3150 vs 1900."""
        result = VotingDomainService.compute_result(
            VoteCounts(positive=3, negative=2, neutral=4), 50
        )

        assert result.positive_weight == 1050
        assert result.negative_weight == 950
        assert result.final_positive_tally == 3150
        assert result.final_negative_tally == 1900
        assert result.outcome is Outcome.PASSED

    def test_negative_sentiment_can_fail_an_even_vote(self):
        result = VotingDomainService.compute_result(VoteCounts(positive=1, negative=1), -100)

        assert result.final_positive_tally == 900
        assert result.final_negative_tally == 1100
        assert result.outcome is Outcome.FAILED

    def test_max_sentiment_negative_only(self):
        result = VotingDomainService.compute_result(VoteCounts(negative=10), 100)

        assert result.final_positive_tally == 0
        assert result.final_negative_tally == 9000
        assert result.outcome is Outcome.FAILED

    def test_no_votes_is_a_tie(self):
        result = VotingDomainService.compute_result(VoteCounts(), 0)

        assert result.final_positive_tally == 0
        assert result.final_negative_tally == 0
        assert result.outcome is Outcome.TIE

    def test_equal_tallies_tie(self):
        result = VotingDomainService.compute_result(VoteCounts(positive=2, negative=2), 0)
        assert result.outcome is Outcome.TIE

    def test_neutral_votes_do_not_count(self):
        result = VotingDomainService.compute_result(VoteCounts(neutral=50), 30)

        assert result.final_positive_tally == 0
        assert result.final_negative_tally == 0
        assert result.outcome is Outcome.TIE

    def test_large_counts_do_not_wrap(self):
        """Tallies stay exact well past 64-bit products."""
        result = VotingDomainService.compute_result(VoteCounts(positive=10**9), 100)
        assert result.final_positive_tally == 1_100_000_000_000

        huge = VotingDomainService.compute_result(VoteCounts(negative=2**64), -100)
        assert huge.final_negative_tally == 2**64 * 1100

    def test_compute_result_rejects_bad_sentiment(self):
        with pytest.raises(SentimentOutOfRangeError):
            VotingDomainService.compute_result(VoteCounts(), 101)


# =============================================================================
# VotingSession Entity Tests
# =============================================================================


@pytest.fixture
def admin_session():
    session = VotingSession()
    session.claim_administrator(ADMIN)
    return session


@pytest.fixture
def open_session(admin_session):
    admin_session.start_voting(ADMIN, "Adopt the new charter")
    return admin_session


class TestVotingSessionDefaults:
    def test_initial_state(self):
        session = VotingSession()

        assert session.proposal_text == ""
        assert session.voting_open is False
        assert session.sentiment_score == 0
        assert session.administrator is None
        assert session.has_administrator is False
        assert session.vote_counts() == VoteCounts()
        assert session.voted_addresses == frozenset()

    def test_sentiment_field_is_range_checked(self):
        with pytest.raises(ValidationError):
            VotingSession(sentiment_score=101)

    def test_voted_addresses_from_constructor(self):
        session = VotingSession.from_state(voted_addresses={ALICE, BOB})
        assert session.voted_addresses == frozenset({ALICE, BOB})

    def test_from_state_validates_fields(self):
        with pytest.raises(ValidationError):
            VotingSession.from_state(sentiment_score=101, voted_addresses={ALICE})

    def test_from_state_copies_voted_addresses(self):
        voted = {ALICE}
        session = VotingSession.from_state(voted_addresses=voted)

        voted.add(BOB)

        assert not session.has_voted(BOB)


class TestClaimAdministrator:
    def test_first_claim_wins(self):
        session = VotingSession()

        assert session.claim_administrator(ALICE) is True
        assert session.administrator == ALICE
        assert session.is_administrator(ALICE)

    def test_later_claims_are_ignored(self):
        session = VotingSession()
        session.claim_administrator(ALICE)

        assert session.claim_administrator(BOB) is False
        assert session.administrator == ALICE
        assert not session.is_administrator(BOB)

    def test_repeat_claim_by_holder_is_noop(self):
        session = VotingSession()
        session.claim_administrator(ALICE)

        assert session.claim_administrator(ALICE) is False
        assert session.administrator == ALICE

    def test_empty_identity_can_claim(self):
        session = VotingSession()

        assert session.claim_administrator("") is True
        assert session.administrator == ""
        assert session.has_administrator
        assert session.claim_administrator(ALICE) is False


class TestStartVoting:
    def test_opens_voting(self, admin_session):
        admin_session.start_voting(ADMIN, "Adopt the new charter")

        assert admin_session.voting_open is True
        assert admin_session.proposal_text == "Adopt the new charter"

    def test_requires_administrator(self, admin_session):
        with pytest.raises(UnauthorizedError) as exc_info:
            admin_session.start_voting(ALICE, "Hijack")

        assert exc_info.value.code == "UNAUTHORIZED"
        assert admin_session.voting_open is False
        assert admin_session.proposal_text == ""

    def test_unclaimed_session_rejects_everyone(self):
        session = VotingSession()
        with pytest.raises(UnauthorizedError):
            session.start_voting(ADMIN, "Anything")

    def test_empty_proposal_is_allowed(self, admin_session):
        admin_session.start_voting(ADMIN, "")
        assert admin_session.voting_open is True

    def test_restart_while_open_resets_counters(self, open_session):
        open_session.cast_vote(ALICE, VoteOption.POSITIVE)
        open_session.update_sentiment(ADMIN, 40)

        open_session.start_voting(ADMIN, "Second proposal")

        assert open_session.vote_counts() == VoteCounts()
        assert open_session.sentiment_score == 0
        assert open_session.proposal_text == "Second proposal"
        assert open_session.voting_open is True

    def test_restart_keeps_voted_addresses(self, open_session):
        open_session.cast_vote(ALICE, VoteOption.POSITIVE)
        open_session.end_voting(ADMIN)

        open_session.start_voting(ADMIN, "Second proposal")

        assert open_session.has_voted(ALICE)
        with pytest.raises(AlreadyVotedError):
            open_session.cast_vote(ALICE, VoteOption.NEGATIVE)
        assert open_session.vote_counts() == VoteCounts()


class TestUpdateSentiment:
    def test_sets_score(self, open_session):
        open_session.update_sentiment(ADMIN, -75)
        assert open_session.sentiment_score == -75

    def test_requires_administrator(self, open_session):
        with pytest.raises(UnauthorizedError):
            open_session.update_sentiment(ALICE, 10)
        assert open_session.sentiment_score == 0

    def test_requires_open_voting(self, admin_session):
        with pytest.raises(VotingClosedError) as exc_info:
            admin_session.update_sentiment(ADMIN, 10)
        assert exc_info.value.code == "VOTING_CLOSED"

    def test_authorization_checked_before_open_state(self, admin_session):
        with pytest.raises(UnauthorizedError):
            admin_session.update_sentiment(ALICE, 10)

    @pytest.mark.parametrize("score", [-101, 101])
    def test_rejects_out_of_range(self, open_session, score):
        open_session.update_sentiment(ADMIN, 20)

        with pytest.raises(SentimentOutOfRangeError):
            open_session.update_sentiment(ADMIN, score)

        assert open_session.sentiment_score == 20

    @pytest.mark.parametrize("score", [-100, 100])
    def test_accepts_bounds(self, open_session, score):
        open_session.update_sentiment(ADMIN, score)
        assert open_session.sentiment_score == score


class TestCastVote:
    @pytest.mark.parametrize(
        "option,expected",
        [
            (VoteOption.POSITIVE, VoteCounts(positive=1)),
            (VoteOption.NEGATIVE, VoteCounts(negative=1)),
            (VoteOption.NEUTRAL, VoteCounts(neutral=1)),
        ],
    )
    def test_increments_matching_counter(self, open_session, option, expected):
        open_session.cast_vote(ALICE, option)

        assert open_session.vote_counts() == expected
        assert open_session.has_voted(ALICE)

    def test_administrator_may_vote(self, open_session):
        open_session.cast_vote(ADMIN, VoteOption.POSITIVE)
        assert open_session.vote_counts().positive == 1

    def test_second_vote_rejected(self, open_session):
        open_session.cast_vote(ALICE, VoteOption.POSITIVE)

        with pytest.raises(AlreadyVotedError) as exc_info:
            open_session.cast_vote(ALICE, VoteOption.NEGATIVE)

        assert exc_info.value.code == "ALREADY_VOTED"
        assert open_session.vote_counts() == VoteCounts(positive=1)

    def test_closed_voting_rejected(self, admin_session):
        with pytest.raises(VotingClosedError):
            admin_session.cast_vote(ALICE, VoteOption.POSITIVE)

        assert not admin_session.has_voted(ALICE)
        assert admin_session.vote_counts() == VoteCounts()

    def test_closed_check_comes_before_already_voted(self, open_session):
        open_session.cast_vote(ALICE, VoteOption.POSITIVE)
        open_session.end_voting(ADMIN)

        with pytest.raises(VotingClosedError):
            open_session.cast_vote(ALICE, VoteOption.POSITIVE)

    @pytest.mark.parametrize("identity", ["", "v" * 129, "v" * 10_000])
    def test_any_identity_string_may_vote(self, open_session, identity):
        open_session.cast_vote(identity, VoteOption.NEGATIVE)

        assert open_session.has_voted(identity)
        assert open_session.vote_counts() == VoteCounts(negative=1)


class TestEndVoting:
    def test_closes_and_returns_result(self, open_session):
        for voter, option in [
            (ALICE, VoteOption.POSITIVE),
            (BOB, VoteOption.POSITIVE),
            (CAROL, VoteOption.POSITIVE),
            ("0xdave", VoteOption.NEGATIVE),
            ("0xerin", VoteOption.NEGATIVE),
        ]:
            open_session.cast_vote(voter, option)
        open_session.update_sentiment(ADMIN, 50)

        result = open_session.end_voting(ADMIN)

        assert open_session.voting_open is False
        assert result.final_positive_tally == 3150
        assert result.final_negative_tally == 1900
        assert result.outcome is Outcome.PASSED

    def test_counters_survive_end(self, open_session):
        open_session.cast_vote(ALICE, VoteOption.NEUTRAL)
        open_session.end_voting(ADMIN)

        assert open_session.vote_counts() == VoteCounts(neutral=1)
        assert open_session.proposal_text == "Adopt the new charter"

    def test_requires_administrator(self, open_session):
        with pytest.raises(UnauthorizedError):
            open_session.end_voting(ALICE)
        assert open_session.voting_open is True

    def test_requires_open_voting(self, admin_session):
        with pytest.raises(VotingClosedError):
            admin_session.end_voting(ADMIN)

    def test_cannot_end_twice(self, open_session):
        open_session.end_voting(ADMIN)
        with pytest.raises(VotingClosedError):
            open_session.end_voting(ADMIN)


class TestSnapshots:
    def test_status(self, open_session):
        open_session.cast_vote(ALICE, VoteOption.NEGATIVE)
        open_session.update_sentiment(ADMIN, -5)

        status = open_session.status()

        assert status.proposal_text == "Adopt the new charter"
        assert status.voting_open is True
        assert status.sentiment_score == -5
        assert status.administrator == ADMIN
        assert status.counts == VoteCounts(negative=1)
        assert status.voter_count == 1

    def test_copy_state_is_independent(self, open_session):
        open_session.cast_vote(ALICE, VoteOption.POSITIVE)

        copy = open_session.copy_state()
        copy.cast_vote(BOB, VoteOption.NEGATIVE)

        assert copy.voted_addresses == frozenset({ALICE, BOB})
        assert open_session.voted_addresses == frozenset({ALICE})
        assert open_session.vote_counts() == VoteCounts(positive=1)
        assert copy.administrator == ADMIN
