"""Generic data access helper for the hosted database REST API.

The database is reached through its PostgREST interface (Supabase REST).
The generic select/insert/update/delete operations never raise: every
failure is returned in ``QueryResult.error``.
"""

import logging
import time
from typing import Any

import httpx

from food_portfolio_api.observability import traced
from food_portfolio_api.observability.metrics import record_store_request
from food_portfolio_api.repositories.results import QueryResult, StoreError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


def format_filter_value(value: Any) -> str:
    """Render a filter value the way PostgREST expects it in a query string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "value"):
        # Enum members
        return str(value.value)
    return str(value)


def ilike_any(columns: list[str], term: str) -> str:
    """Build an OR filter matching ``term`` case-insensitively in any column.

    The pattern is double-quoted so commas and parentheses in the term do
    not break the filter grammar.
    """
    escaped = term.replace("\\", "\\\\").replace('"', '\\"')
    clauses = ",".join(f'{column}.ilike."*{escaped}*"' for column in columns)
    return f"({clauses})"


class DataAccessHelper:
    """HTTP client for table operations against the database REST API.

    A new ``httpx.AsyncClient`` is opened per call; connection pooling and
    timeouts are left to httpx defaults.
    """

    def __init__(self, base_url: str, api_key: str) -> None:
        """Initialize the helper.

        Args:
            base_url: Project URL of the hosted database (e.g., "https://xyz.supabase.co")
            api_key: API key sent as both ``apikey`` and bearer token
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    @property
    def rest_url(self) -> str:
        return f"{self.base_url}/rest/v1"

    def _headers(self, return_rows: bool = False) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if return_rows:
            headers["Prefer"] = "return=representation"
        return headers

    async def _request(
        self,
        method: str,
        table: str,
        operation: str,
        params: dict[str, str],
        json: Any = None,
        return_rows: bool = True,
    ) -> list[Row] | None:
        """Send one request and decode the row list.

        Raises:
            StoreError: On HTTP status errors, transport errors, or undecodable bodies
        """
        url = f"{self.rest_url}/{table}"
        started = time.perf_counter()
        success = False

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=self._headers(return_rows=return_rows),
                )
                response.raise_for_status()
                rows: list[Row] | None = response.json() if return_rows else None
                success = True
                return rows

        except httpx.HTTPStatusError as e:
            raise self._store_error_from_response(e.response) from e
        except httpx.RequestError as e:
            raise StoreError(f"Database request failed: {e}") from e
        except ValueError as e:
            raise StoreError(f"Invalid response from database: {e}") from e
        finally:
            record_store_request(table, operation, time.perf_counter() - started, success)

    @staticmethod
    def _store_error_from_response(response: httpx.Response) -> StoreError:
        """Extract the store's error message and code from a failed response."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("message"):
            return StoreError(
                message=body["message"],
                code=body.get("code"),
                status_code=response.status_code,
            )

        return StoreError(
            message=f"Database request failed with status {response.status_code}",
            status_code=response.status_code,
        )

    @traced("store_select", arg_attributes={"db.table": "table"})
    async def select(
        self, table: str, columns: str = "*", filters: dict[str, Any] | None = None
    ) -> QueryResult[list[Row]]:
        """Select rows matching every non-None equality filter.

        Args:
            table: Table name
            columns: Column list in PostgREST select syntax
            filters: Column to value mapping; None values are skipped

        Returns:
            QueryResult with the matching rows (store order) or the error
        """
        params = {"select": columns}
        for column, value in (filters or {}).items():
            if value is not None:
                params[column] = f"eq.{format_filter_value(value)}"

        try:
            rows = await self._request("GET", table, "select", params, return_rows=True)
            return QueryResult(data=rows or [])
        except StoreError as e:
            logger.error(f"Error selecting from {table}: {e.message}")
            return QueryResult(error=e)

    @traced("store_insert", arg_attributes={"db.table": "table"})
    async def insert(self, table: str, record: Row) -> QueryResult[list[Row]]:
        """Insert one record and return the stored row(s).

        Args:
            table: Table name
            record: Column values to insert

        Returns:
            QueryResult with the inserted rows including generated fields
        """
        try:
            rows = await self._request(
                "POST", table, "insert", {"select": "*"}, json=record, return_rows=True
            )
            return QueryResult(data=rows or [])
        except StoreError as e:
            logger.error(f"Error inserting into {table}: {e.message}")
            return QueryResult(error=e)

    @traced("store_update", arg_attributes={"db.table": "table"})
    async def update(self, table: str, record_id: str, changes: Row) -> QueryResult[list[Row]]:
        """Apply a partial update to the row with the given id.

        Args:
            table: Table name
            record_id: Primary key value
            changes: Columns to overwrite

        Returns:
            QueryResult with the updated rows; an empty list when no row matched
        """
        params = {"id": f"eq.{record_id}", "select": "*"}
        try:
            rows = await self._request("PATCH", table, "update", params, json=changes, return_rows=True)
            return QueryResult(data=rows or [])
        except StoreError as e:
            logger.error(f"Error updating {table}: {e.message}")
            return QueryResult(error=e)

    @traced("store_delete", arg_attributes={"db.table": "table"})
    async def delete(self, table: str, record_id: str) -> QueryResult[None]:
        """Delete the row with the given id.

        Args:
            table: Table name
            record_id: Primary key value

        Returns:
            QueryResult carrying only an error, if any
        """
        try:
            await self._request(
                "DELETE", table, "delete", {"id": f"eq.{record_id}"}, return_rows=False
            )
            return QueryResult()
        except StoreError as e:
            logger.error(f"Error deleting from {table}: {e.message}")
            return QueryResult(error=e)

    @traced("store_fetch", arg_attributes={"db.table": "table"})
    async def fetch(self, table: str, params: dict[str, str]) -> list[Row]:
        """Run a query with arbitrary PostgREST parameters.

        Used for query shapes the generic select cannot express (OR patterns,
        range predicates, ordering).

        Args:
            table: Table name
            params: Raw query-string parameters

        Returns:
            list: Matching rows

        Raises:
            StoreError: If the request fails
        """
        rows = await self._request("GET", table, "fetch", params, return_rows=True)
        return rows or []

    async def check_connection(self, table: str = "dishes") -> bool:
        """Probe the database by reading a single row.

        Args:
            table: Table expected to exist once the schema is provisioned

        Returns:
            bool: True if the table could be read, False otherwise
        """
        try:
            await self._request("GET", table, "probe", {"select": "id", "limit": "1"})
        except StoreError as e:
            if e.code == "42P01" or "does not exist" in e.message:
                logger.warning(
                    f"Database table '{table}' not found. Run the schema script before serving traffic."
                )
            else:
                logger.warning(f"Database connection test failed: {e.message}")
            return False

        logger.info("Database connection successful")
        return True
