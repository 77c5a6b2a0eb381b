"""SQLite implementation of the voting session repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sentiment_ledger.domain.shared.constants import SINGLETON_SESSION_ID
from sentiment_ledger.domain.shared.datetime_utils import UtcDateTime
from sentiment_ledger.domain.shared.messages import LogTemplates
from sentiment_ledger.domain.voting.entities import VotingSession
from sentiment_ledger.domain.voting.repository import VotingSessionRepository

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLiteVotingSessionRepository(VotingSessionRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def load(self) -> VotingSession | None:
        row = await self._db.fetch_one(
            "SELECT * FROM voting_session WHERE id = ?",
            (SINGLETON_SESSION_ID,),
        )

        if row is None:
            return None

        voter_rows = await self._db.fetch_all("SELECT identity FROM voted_addresses")
        voted = {vr["identity"] for vr in voter_rows}

        session = VotingSession.from_state(
            proposal_text=row["proposal_text"],
            voting_open=bool(row["voting_open"]),
            positive_votes=row["positive_votes"],
            negative_votes=row["negative_votes"],
            neutral_votes=row["neutral_votes"],
            sentiment_score=row["sentiment_score"],
            administrator=row["administrator"],
            voted_addresses=voted,
        )

        logger.debug(LogTemplates.LEDGER_STATE_LOADED, session.voting_open, len(voted))
        return session

    async def save(self, session: VotingSession) -> None:
        now = UtcDateTime.now().iso
        async with self._db.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO voting_session (
                    id, proposal_text, voting_open, positive_votes, negative_votes,
                    neutral_votes, sentiment_score, administrator, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    proposal_text = excluded.proposal_text,
                    voting_open = excluded.voting_open,
                    positive_votes = excluded.positive_votes,
                    negative_votes = excluded.negative_votes,
                    neutral_votes = excluded.neutral_votes,
                    sentiment_score = excluded.sentiment_score,
                    administrator = excluded.administrator,
                    updated_at = excluded.updated_at
                """,
                (
                    SINGLETON_SESSION_ID,
                    session.proposal_text,
                    int(session.voting_open),
                    session.positive_votes,
                    session.negative_votes,
                    session.neutral_votes,
                    session.sentiment_score,
                    session.administrator,
                    now,
                ),
            )

            # The voted-address set is append-only, so existing rows keep
            # their original timestamp.
            await conn.executemany(
                "INSERT OR IGNORE INTO voted_addresses (identity, voted_at) VALUES (?, ?)",
                [(identity, now) for identity in sorted(session.voted_addresses)],
            )

        logger.debug(
            LogTemplates.LEDGER_STATE_SAVED, session.voting_open, len(session.voted_addresses)
        )

    async def clear(self) -> None:
        async with self._db.transaction() as conn:
            await conn.execute("DELETE FROM voted_addresses")
            await conn.execute("DELETE FROM voting_session")
