"""Log every ledger notification published on the event bus."""

from __future__ import annotations

import logging

from sentiment_ledger.domain.shared.events import (
    LEDGER_EVENT_TYPES,
    DomainEvent,
    EventBus,
    get_event_bus,
)
from sentiment_ledger.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class LedgerEventLogger:
    """Monitoring subscriber that writes each ledger event to the log."""

    def __init__(self, event_bus: EventBus | None = None, level: int = logging.INFO) -> None:
        self._bus = event_bus if event_bus is not None else get_event_bus()
        self._level = level
        self._started = False

    @property
    def is_running(self) -> bool:
        return self._started

    def start(self) -> None:
        if self._started:
            return
        for event_type in LEDGER_EVENT_TYPES:
            self._bus.subscribe(event_type, self._on_event)
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        for event_type in LEDGER_EVENT_TYPES:
            self._bus.unsubscribe(event_type, self._on_event)
        self._started = False

    def _on_event(self, event: DomainEvent) -> None:
        payload = event.model_dump(mode="json", exclude={"event_id", "occurred_at"})
        logger.log(self._level, LogTemplates.EVENT_RECEIVED, type(event).__name__, payload)
