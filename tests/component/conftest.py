"""Fixtures running the full application against an in-memory store."""

import copy
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from food_portfolio_api.adapters.base_adapter import TextGenerationAdapter
from food_portfolio_api.handlers.api_handler import create_app
from food_portfolio_api.repositories.contact_repository import ContactRepository
from food_portfolio_api.repositories.data_access import DataAccessHelper, format_filter_value
from food_portfolio_api.repositories.dish_repository import DishRepository
from food_portfolio_api.repositories.results import StoreError
from food_portfolio_api.services.ai_gateway import AIGateway

ILIKE_CLAUSE = re.compile(r'(\w+)\.ilike\."\*(.*?)\*"')
QUERY_KEYWORDS = {"select", "order", "limit"}


class InMemoryDataAccess(DataAccessHelper):
    """DataAccessHelper whose HTTP layer is replaced by in-memory tables.

    Understands the subset of PostgREST query parameters the repositories
    send: ``eq``/``gte`` predicates, ``or`` of ``ilike`` clauses, and
    ``order``.
    """

    def __init__(self) -> None:
        super().__init__(base_url="http://store.test", api_key="test-key")
        self.tables: dict[str, list[dict[str, Any]]] = {"dishes": [], "contact_messages": []}
        self.writes = 0
        self.failing_tables: set[str] = set()

    def seed(self, table: str, **row: Any) -> dict[str, Any]:
        row.setdefault("id", str(uuid.uuid4()))
        self.tables[table].append(row)
        return row

    async def _request(
        self,
        method: str,
        table: str,
        operation: str,
        params: dict[str, str],
        json: Any = None,
        return_rows: bool = True,
    ) -> list[dict[str, Any]] | None:
        if table in self.failing_tables:
            raise StoreError("simulated outage", code="08006", status_code=503)

        rows = self.tables[table]

        if method == "POST":
            self.writes += 1
            row = {"id": str(uuid.uuid4()), **json}
            rows.append(row)
            return [copy.deepcopy(row)]

        matched = [row for row in rows if self._matches(row, params)]

        if method == "PATCH":
            self.writes += 1
            for row in matched:
                row.update(json)
        elif method == "DELETE":
            self.writes += 1
            self.tables[table] = [row for row in rows if row not in matched]
            return None

        if "order" in params:
            column, _, direction = params["order"].partition(".")
            matched.sort(key=lambda row: row[column], reverse=direction == "desc")
        return copy.deepcopy(matched)

    @staticmethod
    def _matches(row: dict[str, Any], params: dict[str, str]) -> bool:
        for column, expression in params.items():
            if column in QUERY_KEYWORDS:
                continue
            if column == "or":
                if not any(
                    term.lower() in str(row.get(col) or "").lower()
                    for col, term in ILIKE_CLAUSE.findall(expression)
                ):
                    return False
                continue

            operator, _, operand = expression.partition(".")
            value = row.get(column)
            if operator == "eq" and (value is None or format_filter_value(value) != operand):
                return False
            if operator == "gte" and (
                value is None or datetime.fromisoformat(value) < datetime.fromisoformat(operand)
            ):
                return False
        return True


class ScriptedAdapter(TextGenerationAdapter):
    """Adapter answering every prompt with a fixed reply and remembering prompts."""

    def __init__(self, reply: str = "Our chef recommends the salmon.") -> None:
        super().__init__("scripted")
        self.reply = reply
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
def store() -> InMemoryDataAccess:
    return InMemoryDataAccess()


@pytest.fixture
def adapter() -> ScriptedAdapter:
    return ScriptedAdapter()


def build_client(store: InMemoryDataAccess, gateway: AIGateway, **app_options: Any) -> TestClient:
    app = create_app(
        dish_repository=DishRepository(data_access=store),
        contact_repository=ContactRepository(data_access=store),
        ai_gateway=gateway,
        **app_options,
    )
    return TestClient(app)


@pytest.fixture
def client(store: InMemoryDataAccess, adapter: ScriptedAdapter) -> TestClient:
    """Client for an app with a working AI provider."""
    return build_client(store, AIGateway(adapter=adapter))


@pytest.fixture
def offline_client(store: InMemoryDataAccess) -> TestClient:
    """Client for an app started without an AI provider credential."""
    return build_client(store, AIGateway(adapter=None))


@pytest.fixture
def production_client(
    tmp_path: Path, store: InMemoryDataAccess, adapter: ScriptedAdapter
) -> TestClient:
    """Client for a production app serving a built frontend."""
    (tmp_path / "index.html").write_text("<html>app</html>")
    return build_client(
        store,
        AIGateway(adapter=adapter),
        environment="production",
        static_dir=str(tmp_path),
    )
