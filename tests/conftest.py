import pytest
import pytest_asyncio

# ============================================================================
# Event Bus Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_global_event_bus():
    """Give every test a fresh global event bus."""
    from sentiment_ledger.domain.shared.events import reset_event_bus

    reset_event_bus()
    yield
    reset_event_bus()


@pytest.fixture
def event_bus():
    """Create an isolated event bus for testing."""
    from sentiment_ledger.domain.shared.events import EventBus

    return EventBus()


@pytest.fixture
def recorded_events(event_bus):
    """Subscribe to every ledger event and collect what is published."""
    from sentiment_ledger.domain.shared.events import LEDGER_EVENT_TYPES

    events = []
    for event_type in LEDGER_EVENT_TYPES:
        event_bus.subscribe(event_type, events.append)
    return events


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from sentiment_ledger.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session_repository(in_memory_database):
    """Create a voting session repository with in-memory database."""
    from sentiment_ledger.infrastructure.persistence.repositories.session_repository import (
        SQLiteVotingSessionRepository,
    )

    return SQLiteVotingSessionRepository(in_memory_database)


# ============================================================================
# Ledger Fixtures
# ============================================================================

ADMIN = "0xadmin"
ALICE = "0xalice"
BOB = "0xbob"


@pytest.fixture
def session():
    """Create a fresh voting session."""
    from sentiment_ledger.domain.voting.entities import VotingSession

    return VotingSession()


@pytest.fixture
def ledger(event_bus):
    """Create a voting ledger publishing on the isolated event bus."""
    from sentiment_ledger.application.services.voting_ledger import VotingLedger

    return VotingLedger(event_bus=event_bus)


@pytest.fixture
def open_ledger(ledger):
    """A ledger with an administrator and an open proposal."""
    ledger.claim_administrator(ADMIN)
    ledger.start_voting(ADMIN, "Fund the community garden")
    return ledger
