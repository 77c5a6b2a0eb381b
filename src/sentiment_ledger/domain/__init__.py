# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting types, events and exceptions
- voting/: The sentiment-weighted voting session and its rules
"""

from sentiment_ledger.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
