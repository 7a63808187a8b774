"""Error types and the per-request outcome wrapper."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class TradeError(Exception):
    """Base trade client error."""


class FetchError(TradeError):
    """Raised when a reference-data or listing fetch fails."""


class DispatchError(TradeError):
    """Raised when a search or exchange query cannot be submitted."""


class QueryBuildError(DispatchError):
    """Raised when an item cannot be turned into a request body."""


class PreconditionError(TradeError):
    """Raised when the caller uses the client in an invalid state."""


class NotReadyError(PreconditionError):
    """Raised when reference data has not been synchronized yet."""


class LeagueNotSelectedError(PreconditionError):
    """Raised when a query is issued without a selected league."""


class LeagueNotFoundError(PreconditionError):
    """Raised when the requested league is not in the reference data."""


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a single unit of work: either a value or the error that replaced it."""

    value: Optional[T] = None
    error: Optional[TradeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: TradeError) -> Outcome[T]:
        return cls(error=error)
