"""Unit tests for the portfolio endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from food_portfolio_api.handlers.api_handler import create_app
from food_portfolio_api.models.dish_models import Dish, DishCategory
from food_portfolio_api.repositories.contact_repository import ContactRepository
from food_portfolio_api.repositories.dish_repository import DishRepository
from food_portfolio_api.repositories.results import (
    QueryResult,
    StoreError,
    UpdateOutcome,
    UpdateResult,
)
from food_portfolio_api.services.ai_gateway import AIGateway


@pytest.mark.unit
class TestPortfolioEndpoints:
    """Test suite for /api/portfolio."""

    @pytest.fixture
    def mock_dish_repository(self) -> MagicMock:
        return MagicMock(spec=DishRepository)

    @pytest.fixture
    def client(self, mock_dish_repository: MagicMock) -> TestClient:
        """Create a test client with mocked dependencies."""
        app = create_app(
            dish_repository=mock_dish_repository,
            contact_repository=MagicMock(spec=ContactRepository),
            ai_gateway=AIGateway(adapter=None),
        )
        return TestClient(app)

    @pytest.fixture
    def dishes(self, dish_records: list[dict]) -> list[Dish]:
        return [Dish.from_record(r) for r in dish_records]

    def test_list_dishes(
        self, client: TestClient, mock_dish_repository: MagicMock, dishes: list[Dish]
    ) -> None:
        """Test listing every dish."""
        mock_dish_repository.get_all = AsyncMock(return_value=QueryResult(data=dishes))

        response = client.get("/api/portfolio")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 3
        assert body["data"][0]["title"] == "Seared Salmon"
        assert body["data"][0]["price"] == 24.5
        assert body["data"][1]["ingredients"] == []

    def test_filter_priority(
        self, client: TestClient, mock_dish_repository: MagicMock, dishes: list[Dish]
    ) -> None:
        """Test that search wins over featured, available and category."""
        mock_dish_repository.search = AsyncMock(return_value=QueryResult(data=dishes[:1]))
        mock_dish_repository.get_featured = AsyncMock()
        mock_dish_repository.get_by_category = AsyncMock()

        response = client.get(
            "/api/portfolio",
            params={"search": "salmon", "featured": "true", "category": "mains"},
        )

        assert response.status_code == 200
        assert response.json()["count"] == 1
        mock_dish_repository.search.assert_awaited_once_with("salmon")
        mock_dish_repository.get_featured.assert_not_called()
        mock_dish_repository.get_by_category.assert_not_called()

    def test_featured_beats_category(
        self, client: TestClient, mock_dish_repository: MagicMock, dishes: list[Dish]
    ) -> None:
        mock_dish_repository.get_featured = AsyncMock(return_value=QueryResult(data=dishes[:1]))

        response = client.get("/api/portfolio", params={"featured": "true", "category": "mains"})

        assert response.status_code == 200
        mock_dish_repository.get_featured.assert_awaited_once()

    def test_category_filter(
        self, client: TestClient, mock_dish_repository: MagicMock
    ) -> None:
        mock_dish_repository.get_by_category = AsyncMock(return_value=QueryResult(data=[]))

        response = client.get("/api/portfolio", params={"category": "desserts"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": [], "count": 0}
        mock_dish_repository.get_by_category.assert_awaited_once_with(DishCategory.DESSERTS)

    def test_unknown_category_ignored_when_search_applies(
        self, client: TestClient, mock_dish_repository: MagicMock, dishes: list[Dish]
    ) -> None:
        mock_dish_repository.search = AsyncMock(return_value=QueryResult(data=dishes[:1]))

        response = client.get("/api/portfolio", params={"search": "salmon", "category": "bogus"})

        assert response.status_code == 200
        mock_dish_repository.search.assert_awaited_once_with("salmon")

    def test_unknown_category_filter(
        self, client: TestClient, mock_dish_repository: MagicMock
    ) -> None:
        """Test that an unknown category is rejected when it is the active filter."""
        mock_dish_repository.get_by_category = AsyncMock()

        response = client.get("/api/portfolio", params={"category": "bogus"})

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Invalid category. Must be one of: appetizers, mains, desserts, drinks, specials"
        )
        mock_dish_repository.get_by_category.assert_not_called()

    def test_list_store_error(self, client: TestClient, mock_dish_repository: MagicMock) -> None:
        """Test that store failures pass the message through with 500."""
        mock_dish_repository.get_all = AsyncMock(
            return_value=QueryResult(error=StoreError("connection refused"))
        )

        response = client.get("/api/portfolio")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Error fetching dishes",
            "error": "connection refused",
        }

    def test_get_dish_not_found(self, client: TestClient, mock_dish_repository: MagicMock) -> None:
        mock_dish_repository.get_by_id = AsyncMock(return_value=QueryResult(data=None))

        response = client.get("/api/portfolio/missing")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Dish not found"}

    def test_get_dish(
        self, client: TestClient, mock_dish_repository: MagicMock, dishes: list[Dish]
    ) -> None:
        mock_dish_repository.get_by_id = AsyncMock(return_value=QueryResult(data=dishes[0]))

        response = client.get(f"/api/portfolio/{dishes[0].id}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == dishes[0].id

    def test_create_dish_missing_fields(
        self, client: TestClient, mock_dish_repository: MagicMock
    ) -> None:
        """Test that missing required fields never reach the repository."""
        mock_dish_repository.create = AsyncMock()

        response = client.post("/api/portfolio", json={"title": "Soup", "category": "mains"})

        assert response.status_code == 400
        assert response.json()["message"] == "Title, description, and category are required"
        mock_dish_repository.create.assert_not_called()

    def test_create_dish_unknown_category(
        self, client: TestClient, mock_dish_repository: MagicMock
    ) -> None:
        mock_dish_repository.create = AsyncMock()

        response = client.post(
            "/api/portfolio",
            json={"title": "Soup", "description": "Hot", "category": "soups"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["message"] == "Invalid request data"
        mock_dish_repository.create.assert_not_called()

    def test_create_dish(
        self, client: TestClient, mock_dish_repository: MagicMock, dishes: list[Dish]
    ) -> None:
        mock_dish_repository.create = AsyncMock(return_value=QueryResult(data=dishes[0]))

        response = client.post(
            "/api/portfolio",
            json={"title": "Seared Salmon", "description": "Salmon", "category": "mains"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Dish created successfully"
        assert body["data"]["id"] == dishes[0].id

    def test_update_dish_not_found(
        self, client: TestClient, mock_dish_repository: MagicMock
    ) -> None:
        mock_dish_repository.update = AsyncMock(
            return_value=UpdateResult(outcome=UpdateOutcome.NOT_FOUND)
        )

        response = client.put("/api/portfolio/missing", json={"title": "X"})

        assert response.status_code == 404
        assert response.json()["message"] == "Dish not found"

    def test_update_dish(
        self, client: TestClient, mock_dish_repository: MagicMock, dishes: list[Dish]
    ) -> None:
        mock_dish_repository.update = AsyncMock(
            return_value=UpdateResult(outcome=UpdateOutcome.UPDATED, record=dishes[0])
        )

        response = client.put(f"/api/portfolio/{dishes[0].id}", json={"is_featured": True})

        assert response.status_code == 200
        assert response.json()["message"] == "Dish updated successfully"
        _, changes = mock_dish_repository.update.call_args.args
        assert changes.to_changes() == {"is_featured": True}

    def test_update_dish_store_failure(
        self, client: TestClient, mock_dish_repository: MagicMock
    ) -> None:
        mock_dish_repository.update = AsyncMock(
            return_value=UpdateResult(outcome=UpdateOutcome.FAILED, error=StoreError("down"))
        )

        response = client.put("/api/portfolio/abc", json={"title": "X"})

        assert response.status_code == 500
        assert response.json()["error"] == "down"

    def test_delete_dish(self, client: TestClient, mock_dish_repository: MagicMock) -> None:
        mock_dish_repository.delete = AsyncMock(return_value=QueryResult())

        response = client.delete("/api/portfolio/anything")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Dish deleted successfully"}

    def test_categories(self, client: TestClient) -> None:
        response = client.get("/api/portfolio/categories")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [c["id"] for c in data] == ["appetizers", "mains", "desserts", "drinks", "specials"]

    def test_stats(
        self, client: TestClient, mock_dish_repository: MagicMock, dishes: list[Dish]
    ) -> None:
        """Test that stats count categories over all dishes."""
        mock_dish_repository.get_all = AsyncMock(return_value=QueryResult(data=dishes))
        mock_dish_repository.get_featured = AsyncMock(return_value=QueryResult(data=dishes[:1]))
        mock_dish_repository.get_available = AsyncMock(return_value=QueryResult(data=dishes[:2]))

        response = client.get("/api/portfolio/stats")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "total_dishes": 3,
            "featured_dishes": 1,
            "available_dishes": 2,
            "categories": {
                "appetizers": 1,
                "mains": 1,
                "desserts": 1,
                "drinks": 0,
                "specials": 0,
            },
        }

    def test_stats_store_failure(
        self, client: TestClient, mock_dish_repository: MagicMock, dishes: list[Dish]
    ) -> None:
        mock_dish_repository.get_all = AsyncMock(return_value=QueryResult(data=dishes))
        mock_dish_repository.get_featured = AsyncMock(
            return_value=QueryResult(error=StoreError("timeout"))
        )
        mock_dish_repository.get_available = AsyncMock(return_value=QueryResult(data=[]))

        response = client.get("/api/portfolio/stats")

        assert response.status_code == 500
        assert response.json()["error"] == "timeout"

    def test_unexpected_exception_becomes_500(
        self, client: TestClient, mock_dish_repository: MagicMock
    ) -> None:
        """Test the blanket handler around every handler method."""
        mock_dish_repository.get_all = AsyncMock(side_effect=RuntimeError("kaboom"))

        response = client.get("/api/portfolio")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Internal server error",
            "error": "kaboom",
        }
