"""Domain event bus for publishing and subscribing to ledger notifications."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Callable
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from sentiment_ledger.domain.shared.datetime_utils import utcnow
from sentiment_ledger.domain.shared.messages import LogTemplates
from sentiment_ledger.domain.shared.types import (
    Identity,
    NonEmptyStr,
    NonNegativeInt,
    SentimentScore,
    UtcDatetimeField,
)
from sentiment_ledger.domain.voting.value_objects import Outcome, VoteOption

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="DomainEvent")
EventHandler = Callable[[T], None]


class DomainEvent(BaseModel):
    """Base class for all domain events."""

    model_config = ConfigDict(frozen=True)

    event_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    occurred_at: UtcDatetimeField = Field(default_factory=utcnow)


# === Ledger Events ===


class ProposalSet(DomainEvent):
    proposal_text: str = ""


class VoteCast(DomainEvent):
    voter: Identity
    option: VoteOption


class SentimentUpdated(DomainEvent):
    sentiment_score: SentimentScore = 0


class VotingEnded(DomainEvent):
    final_positive_tally: NonNegativeInt = 0
    final_negative_tally: NonNegativeInt = 0
    outcome: Outcome = Outcome.TIE


LEDGER_EVENT_TYPES: tuple[type[DomainEvent], ...] = (
    ProposalSet,
    VoteCast,
    SentimentUpdated,
    VotingEnded,
)


# === Event Bus ===


class EventBus:
    """In-memory synchronous pub/sub event bus for domain events.

    Handlers run in subscription order on the publishing thread. Exceptions
    in handlers are logged but never reach the publisher and do not prevent
    other handlers from running.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler[Any]]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        with self._lock:
            self._handlers[event_type].append(handler)
        logger.debug("Subscribed handler to: %s", event_type.__name__)

    def unsubscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        with self._lock:
            handlers = self._handlers[event_type]
            if handler in handlers:
                handlers.remove(handler)
                logger.debug("Unsubscribed handler from %s", event_type.__name__)

    def publish(self, event: DomainEvent) -> None:
        event_type = type(event)
        with self._lock:
            handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug("No handlers for %s", event_type.__name__)
            return

        logger.debug("Publishing %s to %d handlers", event_type.__name__, len(handlers))

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.exception(LogTemplates.EVENT_HANDLER_FAILED, event_type.__name__, e)

    def clear(self) -> None:
        """Remove all handlers."""
        with self._lock:
            self._handlers.clear()
        logger.debug("Cleared all event handlers")


_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get or create the global event bus singleton."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Reset the global event bus (for testing)."""
    global _event_bus
    if _event_bus is not None:
        _event_bus.clear()
    _event_bus = None
