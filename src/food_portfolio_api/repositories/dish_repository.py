"""Repository for the ``dishes`` table."""

import logging
from datetime import UTC, datetime
from typing import Any

from food_portfolio_api.models.dish_models import Dish, DishCategory, DishCreate, DishUpdate
from food_portfolio_api.repositories.data_access import DataAccessHelper, ilike_any
from food_portfolio_api.repositories.results import (
    QueryResult,
    StoreError,
    UpdateResult,
    parse_rows,
)

logger = logging.getLogger(__name__)


class DishRepository:
    """Repository for dish CRUD operations and catalog finders."""

    table_name = "dishes"

    def __init__(self, data_access: DataAccessHelper) -> None:
        """Initialize repository.

        Args:
            data_access: Helper performing the table requests
        """
        self.data_access = data_access

    async def _select(self, filters: dict[str, Any] | None = None) -> QueryResult[list[Dish]]:
        result = await self.data_access.select(self.table_name, "*", filters or {})
        if result.error is not None:
            return QueryResult(error=result.error)
        return parse_rows(result.data, Dish.from_record)

    async def get_all(self, category: DishCategory | None = None) -> QueryResult[list[Dish]]:
        """List dishes, optionally restricted to one category."""
        return await self._select({"category": category} if category else None)

    async def get_by_id(self, dish_id: str) -> QueryResult[Dish]:
        """Fetch a single dish.

        Returns:
            QueryResult whose data is the dish, or None if no row matched
        """
        result = await self._select({"id": dish_id})
        if result.error is not None:
            return QueryResult(error=result.error)
        return QueryResult(data=result.data[0] if result.data else None)

    async def create(self, dish: DishCreate) -> QueryResult[Dish]:
        """Insert a dish with defaults filled in and timestamps stamped.

        Args:
            dish: Validated creation payload

        Returns:
            QueryResult with the stored dish
        """
        record = dish.to_record(datetime.now(UTC))
        result = await self.data_access.insert(self.table_name, record)
        if result.error is not None:
            return QueryResult(error=result.error)

        parsed = parse_rows(result.data, Dish.from_record)
        if parsed.error is not None:
            return QueryResult(error=parsed.error)
        if not parsed.data:
            return QueryResult(error=StoreError("Insert returned no rows"))
        return QueryResult(data=parsed.data[0])

    async def update(self, dish_id: str, changes: DishUpdate) -> UpdateResult[Dish]:
        """Overwrite the given fields and refresh updated_at.

        Args:
            dish_id: Dish identifier
            changes: Fields to overwrite; unset fields are left alone

        Returns:
            UpdateResult: UPDATED, NOT_FOUND, or FAILED
        """
        data = changes.to_changes()
        data["updated_at"] = datetime.now(UTC).isoformat()

        result = await self.data_access.update(self.table_name, dish_id, data)
        return UpdateResult.from_rows(result, Dish.from_record)

    async def delete(self, dish_id: str) -> QueryResult[None]:
        """Hard-delete a dish; deleting a missing id is not an error."""
        return await self.data_access.delete(self.table_name, dish_id)

    async def get_by_category(self, category: DishCategory) -> QueryResult[list[Dish]]:
        return await self._select({"category": category})

    async def get_featured(self) -> QueryResult[list[Dish]]:
        return await self._select({"is_featured": True})

    async def get_available(self) -> QueryResult[list[Dish]]:
        return await self._select({"is_available": True})

    async def search(self, term: str) -> QueryResult[list[Dish]]:
        """Case-insensitive match on title or description, newest first.

        Args:
            term: Text to look for anywhere in either column

        Returns:
            QueryResult with matching dishes
        """
        params = {
            "select": "*",
            "or": ilike_any(["title", "description"], term),
            "order": "created_at.desc",
        }
        try:
            rows = await self.data_access.fetch(self.table_name, params)
        except StoreError as e:
            logger.error(f"Error searching dishes: {e.message}")
            return QueryResult(error=e)
        return parse_rows(rows, Dish.from_record)
