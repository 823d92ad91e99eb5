"""Repository for the ``contact_messages`` table."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from food_portfolio_api.models.contact_models import ContactCreate, ContactMessage, ContactStatus
from food_portfolio_api.repositories.data_access import DataAccessHelper, ilike_any
from food_portfolio_api.repositories.results import (
    QueryResult,
    StoreError,
    UpdateResult,
    parse_rows,
)

logger = logging.getLogger(__name__)


class ContactRepository:
    """Repository for contact message intake and admin queries.

    Status is the only column that changes after a message is created.
    """

    table_name = "contact_messages"

    def __init__(self, data_access: DataAccessHelper) -> None:
        """Initialize repository.

        Args:
            data_access: Helper performing the table requests
        """
        self.data_access = data_access

    async def _select(self, filters: dict[str, Any] | None = None) -> QueryResult[list[ContactMessage]]:
        result = await self.data_access.select(self.table_name, "*", filters or {})
        if result.error is not None:
            return QueryResult(error=result.error)
        return parse_rows(result.data, ContactMessage.from_record)

    async def _fetch(self, params: dict[str, str], action: str) -> QueryResult[list[ContactMessage]]:
        try:
            rows = await self.data_access.fetch(self.table_name, params)
        except StoreError as e:
            logger.error(f"Error {action}: {e.message}")
            return QueryResult(error=e)
        return parse_rows(rows, ContactMessage.from_record)

    async def create(self, contact: ContactCreate) -> QueryResult[ContactMessage]:
        """Store a new submission with status ``new``.

        Args:
            contact: Validated submission

        Returns:
            QueryResult with the stored message
        """
        record = contact.to_record(datetime.now(UTC))
        result = await self.data_access.insert(self.table_name, record)
        if result.error is not None:
            return QueryResult(error=result.error)

        parsed = parse_rows(result.data, ContactMessage.from_record)
        if parsed.error is not None:
            return QueryResult(error=parsed.error)
        if not parsed.data:
            return QueryResult(error=StoreError("Insert returned no rows"))
        return QueryResult(data=parsed.data[0])

    async def get_all(self, status: ContactStatus | None = None) -> QueryResult[list[ContactMessage]]:
        return await self._select({"status": status} if status else None)

    async def get_by_id(self, contact_id: str) -> QueryResult[ContactMessage]:
        """Fetch a single message; data is None if no row matched."""
        result = await self._select({"id": contact_id})
        if result.error is not None:
            return QueryResult(error=result.error)
        return QueryResult(data=result.data[0] if result.data else None)

    async def update_status(self, contact_id: str, status: ContactStatus) -> UpdateResult[ContactMessage]:
        """Change a message's status and refresh updated_at.

        Args:
            contact_id: Message identifier
            status: New status

        Returns:
            UpdateResult: UPDATED, NOT_FOUND, or FAILED
        """
        changes = {
            "status": status.value,
            "updated_at": datetime.now(UTC).isoformat(),
        }
        result = await self.data_access.update(self.table_name, contact_id, changes)
        return UpdateResult.from_rows(result, ContactMessage.from_record)

    async def delete(self, contact_id: str) -> QueryResult[None]:
        return await self.data_access.delete(self.table_name, contact_id)

    async def get_by_status(self, status: ContactStatus) -> QueryResult[list[ContactMessage]]:
        return await self._select({"status": status})

    async def get_recent(self, days: int = 30) -> QueryResult[list[ContactMessage]]:
        """Messages created within the last ``days`` days, newest first.

        Args:
            days: Size of the window ending now

        Returns:
            QueryResult with matching messages
        """
        cutoff = datetime.now(UTC) - timedelta(days=days)
        params = {
            "select": "*",
            "created_at": f"gte.{cutoff.isoformat()}",
            "order": "created_at.desc",
        }
        return await self._fetch(params, "getting recent messages")

    async def search(self, term: str) -> QueryResult[list[ContactMessage]]:
        """Case-insensitive match on name or email, newest first."""
        params = {
            "select": "*",
            "or": ilike_any(["name", "email"], term),
            "order": "created_at.desc",
        }
        return await self._fetch(params, "searching messages")
