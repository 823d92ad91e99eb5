"""Request handlers for the AI chatbot endpoints."""

import logging
from datetime import UTC, datetime

from fastapi.responses import JSONResponse

from food_portfolio_api.handlers.responses import (
    error_response,
    handle_unexpected_errors,
    success_response,
)
from food_portfolio_api.models.chat_models import (
    ChatRequest,
    CookingTipRequest,
    RecommendationRequest,
)
from food_portfolio_api.models.dish_models import Dish
from food_portfolio_api.repositories.dish_repository import DishRepository
from food_portfolio_api.services.ai_gateway import AIGateway, AIGatewayError

logger = logging.getLogger(__name__)

CAPABILITIES = [
    "General food and cooking questions",
    "Menu item information",
    "Food recommendations",
    "Cooking tips and advice",
    "Event planning assistance",
]

CHAT_FALLBACK_MESSAGE = (
    "I apologize, but I'm having trouble right now. Please feel free to contact us "
    "directly through our contact form for immediate assistance."
)


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


class ChatbotHandler:
    """Handlers for ``/api/chatbot``."""

    def __init__(self, ai_gateway: AIGateway, dish_repository: DishRepository) -> None:
        """Initialize handler.

        Args:
            ai_gateway: Gateway to the text generation provider
            dish_repository: Source of menu context for chat prompts
        """
        self.ai_gateway = ai_gateway
        self.dish_repository = dish_repository

    async def _load_menu_context(self) -> list[Dish] | None:
        """Fetch available dishes for the prompt. Failures are logged and ignored."""
        try:
            result = await self.dish_repository.get_available()
        except Exception as e:
            logger.warning(f"Failed to load portfolio context: {e}")
            return None

        if result.error is not None:
            logger.warning(f"Failed to load portfolio context: {result.error.message}")
            return None
        return result.data

    @handle_unexpected_errors(fallbackMessage=CHAT_FALLBACK_MESSAGE)
    async def chat(self, payload: ChatRequest) -> JSONResponse:
        """Answer a customer message, optionally grounded in the current menu.

        Args:
            payload: Message and whether to include menu context

        Returns:
            JSONResponse: echoed message, AI text, timestamp and whether
            context was included
        """
        if _is_blank(payload.message):
            return error_response(400, "Message is required")

        if not self.ai_gateway.is_available:
            return error_response(
                503,
                "AI chatbot service is currently unavailable. "
                "Please contact us directly for assistance.",
            )

        context = await self._load_menu_context() if payload.includeContext else None

        try:
            reply = await self.ai_gateway.generate_response(payload.message, context)
        except AIGatewayError as e:
            return error_response(500, e.message, fallbackMessage=CHAT_FALLBACK_MESSAGE)

        return success_response(
            data={
                "userMessage": payload.message,
                "aiResponse": reply.text,
                "timestamp": reply.timestamp,
                "contextIncluded": context is not None,
            }
        )

    @handle_unexpected_errors
    async def recommend(self, payload: RecommendationRequest) -> JSONResponse:
        if _is_blank(payload.preferences):
            return error_response(400, "Food preferences are required")

        if not self.ai_gateway.is_available:
            return error_response(503, "Recommendation service is currently unavailable")

        try:
            reply = await self.ai_gateway.generate_food_recommendation(
                payload.preferences, payload.dietaryRestrictions
            )
        except AIGatewayError as e:
            return error_response(500, e.message)

        return success_response(
            data={
                "preferences": payload.preferences,
                "dietaryRestrictions": payload.dietaryRestrictions,
                "recommendations": reply.text,
                "timestamp": reply.timestamp,
            }
        )

    @handle_unexpected_errors
    async def cooking_tip(self, payload: CookingTipRequest) -> JSONResponse:
        if _is_blank(payload.topic):
            return error_response(400, "Cooking topic is required")

        if not self.ai_gateway.is_available:
            return error_response(503, "Cooking tips service is currently unavailable")

        try:
            reply = await self.ai_gateway.generate_cooking_tip(payload.topic)
        except AIGatewayError as e:
            return error_response(500, e.message)

        return success_response(
            data={"topic": payload.topic, "tip": reply.text, "timestamp": reply.timestamp}
        )

    @handle_unexpected_errors
    async def get_status(self) -> JSONResponse:
        available = self.ai_gateway.is_available
        return success_response(
            data={
                "aiAvailable": available,
                "capabilities": CAPABILITIES,
                "apiStatus": "connected" if available else "disconnected",
                "lastUpdated": datetime.now(UTC),
            }
        )

    @handle_unexpected_errors
    async def test_connection(self) -> JSONResponse:
        """Probe the provider; 200 when it answered, 503 otherwise."""
        result = await self.ai_gateway.test_connection()
        body = {"success": result.success, "message": result.message}
        if result.test_response is not None:
            body["testResponse"] = result.test_response
        if result.error is not None:
            body["error"] = result.error
        return JSONResponse(status_code=200 if result.success else 503, content=body)

    @handle_unexpected_errors
    async def get_history(self) -> JSONResponse:
        return success_response(
            data={"conversations": [], "message": "Conversation history feature coming soon"}
        )
