"""FastAPI application for the food portfolio API."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from food_portfolio_api.handlers.chatbot_handler import ChatbotHandler
from food_portfolio_api.handlers.contact_handler import ContactHandler
from food_portfolio_api.handlers.portfolio_handler import PortfolioHandler
from food_portfolio_api.handlers.responses import error_response, success_response
from food_portfolio_api.repositories.contact_repository import ContactRepository
from food_portfolio_api.repositories.data_access import DataAccessHelper
from food_portfolio_api.repositories.dish_repository import DishRepository
from food_portfolio_api.routes.chatbot_routes import build_chatbot_router
from food_portfolio_api.routes.contact_routes import build_contact_router
from food_portfolio_api.routes.portfolio_routes import build_portfolio_router
from food_portfolio_api.services.ai_gateway import AIGateway

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:3002",
]

AVAILABLE_ENDPOINTS = [
    "GET /api/health",
    "GET /api/portfolio",
    "POST /api/portfolio",
    "PUT /api/portfolio/:id",
    "DELETE /api/portfolio/:id",
    "POST /api/contact",
    "POST /api/chatbot/chat",
    "POST /api/chatbot/recommend",
    "GET /api/chatbot/status",
]


def endpoint_not_found() -> JSONResponse:
    return error_response(404, "API endpoint not found", availableEndpoints=AVAILABLE_ENDPOINTS)


def create_app(
    dish_repository: DishRepository,
    contact_repository: ContactRepository,
    ai_gateway: AIGateway,
    environment: str = "development",
    allowed_origins: list[str] | None = None,
    static_dir: str | None = None,
    data_access: DataAccessHelper | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        dish_repository: Repository for dish records
        contact_repository: Repository for contact messages
        ai_gateway: Gateway to the text generation provider
        environment: Deployment environment name reported by the health check
        allowed_origins: CORS origins; defaults to the local frontend ports
        static_dir: Built frontend directory served in production
        data_access: When given, the database connection is probed at startup

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        if data_access is not None:
            await data_access.check_connection()
        yield

    app = FastAPI(
        title="Food Portfolio API",
        description="Dish catalog, contact intake and AI chat for the food portfolio site",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Store dependencies in app state for access in tests and route handlers
    app.state.dish_repository = dish_repository
    app.state.contact_repository = contact_repository
    app.state.ai_gateway = ai_gateway
    app.state.environment = environment

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or DEFAULT_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
        return error_response(400, "Invalid request data", errors=jsonable_encoder(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return endpoint_not_found()
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return error_response(500, "Internal server error", error=str(exc))

    @app.get("/api/health", tags=["Health"])
    async def health_check() -> JSONResponse:
        """Health check endpoint.

        Returns:
            Service status, current time and environment
        """
        return success_response(
            message="Food Portfolio API is running!",
            timestamp=datetime.now(UTC),
            environment=environment,
        )

    portfolio_handler = PortfolioHandler(dish_repository=dish_repository)
    contact_handler = ContactHandler(contact_repository=contact_repository)
    chatbot_handler = ChatbotHandler(ai_gateway=ai_gateway, dish_repository=dish_repository)

    app.include_router(build_portfolio_router(portfolio_handler), prefix="/api/portfolio")
    app.include_router(build_contact_router(contact_handler), prefix="/api/contact")
    app.include_router(build_chatbot_router(chatbot_handler), prefix="/api/chatbot")

    if environment == "production" and static_dir and Path(static_dir).is_dir():
        _mount_frontend(app, Path(static_dir))

    return app


def _mount_frontend(app: FastAPI, static_root: Path) -> None:
    """Serve the built single-page frontend for every non-API GET."""
    root = static_root.resolve()
    index_file = root / "index.html"
    logger.info(f"Serving frontend from {root}")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str) -> Response:
        if full_path == "api" or full_path.startswith("api/"):
            return endpoint_not_found()

        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        if index_file.is_file():
            return FileResponse(index_file)
        return endpoint_not_found()
