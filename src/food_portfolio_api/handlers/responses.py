"""JSON response helpers shared by the request handlers."""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from food_portfolio_api.repositories.results import StoreError

logger = logging.getLogger(__name__)


def success_response(status_code: int = 200, **fields: Any) -> JSONResponse:
    """Build a ``{success: true, ...}`` response."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": True, **fields}),
    )


def error_response(status_code: int, message: str, **fields: Any) -> JSONResponse:
    """Build a ``{success: false, message, ...}`` response."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "message": message, **fields}),
    )


def store_error_response(message: str, error: StoreError) -> JSONResponse:
    """500 response passing the store's error text through to the caller."""
    logger.error(f"{message}: {error.message}")
    return error_response(500, message, error=error.message)


def handle_unexpected_errors(
    func: Callable[..., Awaitable[JSONResponse]] | None = None, **extra_fields: Any
) -> Any:
    """Turn any exception escaping a handler method into a generic 500.

    Usable bare or with extra fields merged into the 500 body.

    Example:
        @handle_unexpected_errors
        async def get_dish(self, dish_id: str) -> JSONResponse:
            ...

        @handle_unexpected_errors(fallbackMessage="Please contact us directly.")
        async def chat(self, payload: ChatRequest) -> JSONResponse:
            ...
    """

    def decorator(
        handler: Callable[..., Awaitable[JSONResponse]],
    ) -> Callable[..., Awaitable[JSONResponse]]:
        @functools.wraps(handler)
        async def wrapper(*args: Any, **kwargs: Any) -> JSONResponse:
            try:
                return await handler(*args, **kwargs)
            except Exception as e:
                logger.exception(f"Unhandled error in {handler.__qualname__}: {e}")
                return error_response(500, "Internal server error", error=str(e), **extra_fields)

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
