"""Main application entry point for the food portfolio API.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os

from fastapi import FastAPI

from food_portfolio_api.adapters.gemini_adapter import DEFAULT_MODEL, GeminiAdapter
from food_portfolio_api.handlers.api_handler import DEFAULT_ALLOWED_ORIGINS, create_app
from food_portfolio_api.observability import configure_logging, setup_observability
from food_portfolio_api.repositories.contact_repository import ContactRepository
from food_portfolio_api.repositories.data_access import DataAccessHelper
from food_portfolio_api.repositories.dish_repository import DishRepository
from food_portfolio_api.services.ai_gateway import AIGateway

logger = logging.getLogger(__name__)


def create_data_access() -> DataAccessHelper:
    """Create the database helper from environment variables.

    Returns:
        DataAccessHelper configured for the hosted database

    Raises:
        ValueError: If required configuration is missing
    """
    supabase_url = os.getenv("SUPABASE_URL")
    supabase_key = os.getenv("SUPABASE_ANON_KEY")

    if not supabase_url or not supabase_key:
        raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set in environment")

    logger.info(f"Database client configured - URL: {supabase_url}")
    return DataAccessHelper(base_url=supabase_url, api_key=supabase_key)


def create_ai_gateway() -> AIGateway:
    """Create the AI gateway, available only when an API key is configured.

    Returns:
        AIGateway wrapping a Gemini adapter, or an unavailable gateway
    """
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        logger.warning("GEMINI_API_KEY not configured - chatbot features will be unavailable")
        return AIGateway(adapter=None)

    model = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
    timeout_seconds = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "60"))
    logger.info(f"Gemini adapter configured - model: {model}")
    return AIGateway(
        adapter=GeminiAdapter(api_key=api_key, model=model, timeout_seconds=timeout_seconds)
    )


def get_allowed_origins() -> list[str]:
    frontend_url = os.getenv("FRONTEND_URL")
    if not frontend_url:
        return DEFAULT_ALLOWED_ORIGINS
    return [frontend_url, *DEFAULT_ALLOWED_ORIGINS[1:]]


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the database helper and repositories
    3. Creates the AI gateway
    4. Creates the FastAPI app with all routes
    5. Sets up observability when enabled

    Returns:
        Configured FastAPI application instance
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Initializing food portfolio API...")

    data_access = create_data_access()
    dish_repository = DishRepository(data_access=data_access)
    contact_repository = ContactRepository(data_access=data_access)

    ai_gateway = create_ai_gateway()

    environment = os.getenv("ENVIRONMENT", "development")
    app = create_app(
        dish_repository=dish_repository,
        contact_repository=contact_repository,
        ai_gateway=ai_gateway,
        environment=environment,
        allowed_origins=get_allowed_origins(),
        static_dir=os.getenv("STATIC_DIR", "dist"),
        data_access=data_access,
    )

    if os.getenv("OTEL_ENABLED", "false").lower() == "true":
        setup_observability(app)

    logger.info(f"Food portfolio API initialized successfully ({environment})")

    return app


# Create the FastAPI application instance (only when not in test mode)
# This prevents the app from being created during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    # Create a placeholder app for test imports
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    port = int(os.getenv("PORT", "5000"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting server on {host}:{port}")
    logger.info(f"API base URL: http://{host}:{port}/api")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.getenv("ENVIRONMENT", "development") == "development",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
