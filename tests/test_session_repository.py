"""
Integration Tests for the SQLite voting session repository

Uses a shared in-memory SQLite database.
"""

import sqlite3

import pytest

from sentiment_ledger.domain.voting.entities import VotingSession
from sentiment_ledger.domain.voting.value_objects import VoteOption


class TestSQLiteVotingSessionRepository:
    @pytest.mark.asyncio
    async def test_load_empty_returns_none(self, session_repository):
        assert await session_repository.load() is None

    @pytest.mark.asyncio
    async def test_save_and_load(self, session_repository):
        session = VotingSession()
        session.claim_administrator("0xadmin")
        session.start_voting("0xadmin", "Build a library")
        session.update_sentiment("0xadmin", 75)
        session.cast_vote("0xalice", VoteOption.POSITIVE)
        session.cast_vote("0xbob", VoteOption.NEUTRAL)

        await session_repository.save(session)
        loaded = await session_repository.load()

        assert loaded is not None
        assert loaded.proposal_text == "Build a library"
        assert loaded.voting_open is True
        assert loaded.sentiment_score == 75
        assert loaded.administrator == "0xadmin"
        assert loaded.positive_votes == 1
        assert loaded.neutral_votes == 1
        assert loaded.negative_votes == 0
        assert loaded.voted_addresses == frozenset({"0xalice", "0xbob"})

    @pytest.mark.asyncio
    async def test_unusual_identities_round_trip(self, session_repository):
        long_voter = "v" * 129
        session = VotingSession()
        session.claim_administrator("")
        session.start_voting("", "Opaque identities")
        session.cast_vote(long_voter, VoteOption.POSITIVE)
        session.cast_vote("", VoteOption.NEGATIVE)

        await session_repository.save(session)
        loaded = await session_repository.load()

        assert loaded.administrator == ""
        assert loaded.voted_addresses == frozenset({long_voter, ""})

    @pytest.mark.asyncio
    async def test_save_overwrites_single_row(self, session_repository, in_memory_database):
        session = VotingSession()
        session.claim_administrator("0xadmin")
        session.start_voting("0xadmin", "First")
        await session_repository.save(session)

        session.end_voting("0xadmin")
        session.start_voting("0xadmin", "Second")
        await session_repository.save(session)

        rows = await in_memory_database.fetch_all("SELECT * FROM voting_session")
        assert len(rows) == 1
        assert rows[0]["proposal_text"] == "Second"

    @pytest.mark.asyncio
    async def test_voted_addresses_are_append_only(self, session_repository, in_memory_database):
        session = VotingSession()
        session.claim_administrator("0xadmin")
        session.start_voting("0xadmin", "Append")
        session.cast_vote("0xalice", VoteOption.POSITIVE)
        await session_repository.save(session)

        first = await in_memory_database.fetch_one(
            "SELECT voted_at FROM voted_addresses WHERE identity = ?", ("0xalice",)
        )

        session.cast_vote("0xbob", VoteOption.NEGATIVE)
        await session_repository.save(session)

        rows = await in_memory_database.fetch_all("SELECT * FROM voted_addresses")
        assert {r["identity"] for r in rows} == {"0xalice", "0xbob"}
        again = await in_memory_database.fetch_one(
            "SELECT voted_at FROM voted_addresses WHERE identity = ?", ("0xalice",)
        )
        assert again == first

    @pytest.mark.asyncio
    async def test_unclaimed_session_round_trips(self, session_repository):
        await session_repository.save(VotingSession())
        loaded = await session_repository.load()

        assert loaded is not None
        assert loaded.administrator is None
        assert loaded.voting_open is False
        assert loaded.voted_addresses == frozenset()

    @pytest.mark.asyncio
    async def test_clear(self, session_repository):
        session = VotingSession.from_state(voted_addresses={"0xalice"})
        await session_repository.save(session)

        await session_repository.clear()

        assert await session_repository.load() is None


class TestDatabase:
    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, in_memory_database):
        assert in_memory_database.is_initialized
        await in_memory_database.initialize()
        assert in_memory_database.is_initialized

    @pytest.mark.asyncio
    async def test_schema_rejects_out_of_range_sentiment(self, in_memory_database):
        with pytest.raises(sqlite3.IntegrityError, match="CHECK constraint failed"):
            await in_memory_database.execute(
                "INSERT INTO voting_session (id, sentiment_score, updated_at) VALUES (1, 500, 'x')"
            )

    @pytest.mark.asyncio
    async def test_schema_allows_only_one_session_row(self, in_memory_database):
        with pytest.raises(sqlite3.IntegrityError, match="CHECK constraint failed"):
            await in_memory_database.execute(
                "INSERT INTO voting_session (id, updated_at) VALUES (2, 'x')"
            )

    @pytest.mark.asyncio
    async def test_file_database(self, tmp_path):
        from sentiment_ledger.infrastructure.persistence.database import Database

        db = Database(f"sqlite:///{tmp_path}/nested/ledger.db")
        await db.initialize()
        try:
            assert db.db_path == f"{tmp_path}/nested/ledger.db"
            assert (tmp_path / "nested" / "ledger.db").exists()
            assert await db.fetch_all("SELECT * FROM voted_addresses") == []
        finally:
            await db.close()
        assert db.is_initialized is False
