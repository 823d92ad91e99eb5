"""Result types returned by the data access layer.

Following the pattern used across the repositories, expected failures are
returned as values rather than raised.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreError(Exception):
    """Failure reported by the database REST API or the transport beneath it."""

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


@dataclass
class QueryResult(Generic[T]):
    """Outcome of a store call.

    Attributes:
        data: Returned payload, None on failure
        error: The failure, None on success
    """

    data: T | None = None
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class UpdateOutcome(str, Enum):
    """Enumeration of update outcomes."""

    UPDATED = "updated"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass
class UpdateResult(Generic[T]):
    """Tri-state result of an update by id.

    Attributes:
        outcome: Whether a row was updated, matched nothing, or the call failed
        record: The updated record when outcome is UPDATED
        error: The failure when outcome is FAILED
    """

    outcome: UpdateOutcome
    record: T | None = None
    error: StoreError | None = None

    @classmethod
    def from_rows(
        cls, result: QueryResult[list[dict[str, Any]]], parse: Callable[[dict[str, Any]], T]
    ) -> "UpdateResult[T]":
        """Build an UpdateResult from the rows returned by an update call.

        Args:
            result: Raw result of DataAccessHelper.update
            parse: Callable turning a row into the record type

        Returns:
            UpdateResult: UPDATED with the first row, NOT_FOUND for no rows, FAILED on error
        """
        if result.error is not None:
            return cls(outcome=UpdateOutcome.FAILED, error=result.error)
        if not result.data:
            return cls(outcome=UpdateOutcome.NOT_FOUND)
        try:
            return cls(outcome=UpdateOutcome.UPDATED, record=parse(result.data[0]))
        except ValidationError as e:
            logger.error(f"Store returned a malformed row after update: {e}")
            return cls(outcome=UpdateOutcome.FAILED, error=StoreError("Malformed record"))


def parse_rows(
    rows: list[dict[str, Any]] | None, parse: Callable[[dict[str, Any]], T]
) -> QueryResult[list[T]]:
    """Parse store rows into models, turning malformed rows into an error result."""
    try:
        return QueryResult(data=[parse(row) for row in rows or []])
    except ValidationError as e:
        logger.error(f"Store returned a malformed row: {e}")
        return QueryResult(error=StoreError(f"Malformed record: {e.error_count()} validation error(s)"))
