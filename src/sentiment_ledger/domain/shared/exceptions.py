"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class UnauthorizedError(DomainError):
    """Raised when a non-administrator calls an administrator-only operation."""

    def __init__(self, operation: str, caller: str, message: str | None = None) -> None:
        msg = message or f"'{caller}' is not authorized to perform '{operation}'"
        super().__init__(msg, code="UNAUTHORIZED")
        self.operation = operation
        self.caller = caller


class VotingClosedError(DomainError):
    """Raised when an operation requires an open voting session but none is open."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}': voting is closed"
        super().__init__(msg, code="VOTING_CLOSED")
        self.operation = operation


class SentimentOutOfRangeError(DomainError):
    """Raised when a sentiment score falls outside the accepted range."""

    def __init__(self, score: int, minimum: int, maximum: int, message: str | None = None) -> None:
        msg = message or f"Sentiment score {score} is outside [{minimum}, {maximum}]"
        super().__init__(msg, code="OUT_OF_RANGE")
        self.score = score
        self.minimum = minimum
        self.maximum = maximum


class AlreadyVotedError(DomainError):
    """Raised when an identity that has already voted tries to vote again."""

    def __init__(self, voter: str, message: str | None = None) -> None:
        msg = message or f"'{voter}' has already voted"
        super().__init__(msg, code="ALREADY_VOTED")
        self.voter = voter
