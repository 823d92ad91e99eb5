"""Request handlers for the dish catalog endpoints."""

import asyncio
import logging

from fastapi.responses import JSONResponse

from food_portfolio_api.handlers.responses import (
    error_response,
    handle_unexpected_errors,
    store_error_response,
    success_response,
)
from food_portfolio_api.models.dish_models import (
    DISH_CATEGORIES,
    DishCategory,
    DishCreate,
    DishUpdate,
)
from food_portfolio_api.repositories.dish_repository import DishRepository
from food_portfolio_api.repositories.results import UpdateOutcome

logger = logging.getLogger(__name__)

VALID_CATEGORIES = ", ".join(category.value for category in DishCategory)


class PortfolioHandler:
    """Handlers for ``/api/portfolio``."""

    def __init__(self, dish_repository: DishRepository) -> None:
        """Initialize handler.

        Args:
            dish_repository: Repository for dish records
        """
        self.dish_repository = dish_repository

    @handle_unexpected_errors
    async def list_dishes(
        self,
        category: str | None = None,
        featured: str | None = None,
        available: str | None = None,
        search: str | None = None,
    ) -> JSONResponse:
        """List dishes.

        Only one filter applies, in priority order: search, featured,
        available, category.

        Args:
            category: Restrict to one category; validated only when it is the
                filter that applies
            featured: "true" to list featured dishes only
            available: "true" to list available dishes only
            search: Case-insensitive text matched against title and description

        Returns:
            JSONResponse: ``{success, data, count}``
        """
        if search:
            result = await self.dish_repository.search(search)
        elif featured == "true":
            result = await self.dish_repository.get_featured()
        elif available == "true":
            result = await self.dish_repository.get_available()
        elif category:
            try:
                dish_category = DishCategory(category)
            except ValueError:
                return error_response(400, f"Invalid category. Must be one of: {VALID_CATEGORIES}")
            result = await self.dish_repository.get_by_category(dish_category)
        else:
            result = await self.dish_repository.get_all()

        if result.error is not None:
            return store_error_response("Error fetching dishes", result.error)

        dishes = result.data or []
        return success_response(data=dishes, count=len(dishes))

    @handle_unexpected_errors
    async def get_dish(self, dish_id: str) -> JSONResponse:
        result = await self.dish_repository.get_by_id(dish_id)
        if result.error is not None:
            return store_error_response("Error fetching dish", result.error)
        if result.data is None:
            return error_response(404, "Dish not found")
        return success_response(data=result.data)

    @handle_unexpected_errors
    async def create_dish(self, payload: DishCreate) -> JSONResponse:
        """Create a dish.

        Args:
            payload: Dish fields; title, description and category are required

        Returns:
            JSONResponse: 201 with the stored dish
        """
        if not payload.title or not payload.description or payload.category is None:
            return error_response(400, "Title, description, and category are required")

        result = await self.dish_repository.create(payload)
        if result.error is not None:
            return store_error_response("Error creating dish", result.error)

        logger.info(f"Dish created: {result.data.id}")
        return success_response(201, message="Dish created successfully", data=result.data)

    @handle_unexpected_errors
    async def update_dish(self, dish_id: str, payload: DishUpdate) -> JSONResponse:
        result = await self.dish_repository.update(dish_id, payload)

        if result.outcome == UpdateOutcome.FAILED:
            return store_error_response("Error updating dish", result.error)
        if result.outcome == UpdateOutcome.NOT_FOUND:
            return error_response(404, "Dish not found")

        return success_response(message="Dish updated successfully", data=result.record)

    @handle_unexpected_errors
    async def delete_dish(self, dish_id: str) -> JSONResponse:
        """Delete a dish. Succeeds whether or not the id existed."""
        result = await self.dish_repository.delete(dish_id)
        if result.error is not None:
            return store_error_response("Error deleting dish", result.error)
        return success_response(message="Dish deleted successfully")

    @handle_unexpected_errors
    async def get_categories(self) -> JSONResponse:
        return success_response(data=DISH_CATEGORIES)

    @handle_unexpected_errors
    async def get_stats(self) -> JSONResponse:
        """Summarize the catalog.

        Returns:
            JSONResponse: totals for all, featured and available dishes and
            a per-category count over all dishes
        """
        all_dishes, featured, available = await asyncio.gather(
            self.dish_repository.get_all(),
            self.dish_repository.get_featured(),
            self.dish_repository.get_available(),
        )

        for result in (all_dishes, featured, available):
            if result.error is not None:
                return store_error_response("Error fetching portfolio statistics", result.error)

        categories = {category.value: 0 for category in DishCategory}
        for dish in all_dishes.data:
            categories[dish.category.value] += 1

        stats = {
            "total_dishes": len(all_dishes.data),
            "featured_dishes": len(featured.data),
            "available_dishes": len(available.data),
            "categories": categories,
        }
        return success_response(data=stats)
