"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the ledger is defined here once,
so models can simply annotate their fields::

    from sentiment_ledger.domain.shared.types import Identity, SentimentScore

    class MyModel(BaseModel):
        voter: Identity
        score: SentimentScore
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BeforeValidator, Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

SENTIMENT_MIN: int = -100
SENTIMENT_MAX: int = 100

SentimentScore = Annotated[int, Field(ge=SENTIMENT_MIN, le=SENTIMENT_MAX)]
"""Sentiment score in [-100, 100]."""

VoteWeight = Annotated[int, Field(ge=0)]
"""Per-side multiplier applied to a raw vote count."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

Identity = str
"""Opaque caller identity as mapped by the host (e.g. a Discord user id).

Any string is accepted, including the empty string. Hosts that want a
length limit enforce it before calling the ledger.
"""


# ── Settings-specific constraints ──────────────────────────────────

BusyTimeoutMs = Annotated[int, Field(ge=1000, le=30000)]
"""Database busy timeout in milliseconds: 1 000 … 30 000."""

ConnectionTimeoutS = Annotated[int, Field(ge=1, le=60)]
"""Database connection timeout in seconds: 1 … 60."""

CommandPrefixStr = Annotated[str, Field(min_length=1, max_length=5)]
"""Bot command prefix: 1-5 characters."""


# ── Datetime constraints ────────────────────────────────────────────

def _ensure_utc(v: datetime) -> datetime:
    """Validate that a datetime is timezone-aware and normalise to UTC."""
    if v.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    return v.astimezone(UTC)


UtcDatetimeField = Annotated[datetime, BeforeValidator(_ensure_utc)]
"""Timezone-aware datetime, normalised to UTC on input."""
