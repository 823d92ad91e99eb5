"""AI gateway mediating all access to the text generation provider."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from food_portfolio_api.adapters.base_adapter import (
    ProviderError,
    ProviderErrorKind,
    TextGenerationAdapter,
)
from food_portfolio_api.models.dish_models import Dish
from food_portfolio_api.observability import traced
from food_portfolio_api.observability.metrics import record_ai_failure, record_ai_request

logger = logging.getLogger(__name__)

SYSTEM_CONTEXT = """
You are a helpful AI assistant for "Culinary Creations", a premium food portfolio website.
Your role is to help customers with:
- Information about our dishes and menu items
- Culinary advice and cooking tips
- Event planning and catering inquiries
- Food recommendations based on preferences
- General information about our services

Always be friendly, professional, and knowledgeable about food and cooking.
If asked about specific dishes, refer to the portfolio context provided.
If you don't know something specific about our business, politely redirect them to contact us directly.
"""

RECOMMENDATION_TEMPLATE = """
As a culinary expert for Culinary Creations, recommend dishes based on these preferences:
- Customer preferences: {preferences}
- Dietary restrictions: {restrictions}

Please provide 2-3 specific dish recommendations with brief descriptions.
Focus on dishes that would fit our upscale food portfolio.
Be creative but realistic for a premium restaurant.
"""

COOKING_TIP_TEMPLATE = """
As a professional chef from Culinary Creations, provide a helpful cooking tip about: {topic}

Make it practical, professional, and suitable for both home cooks and culinary enthusiasts.
Keep it concise but informative.
"""

CONNECTION_TEST_PROMPT = "Hello! Please respond with a brief greeting."

CREDENTIAL_INVALID_MESSAGE = "Invalid AI service API key. Please check your configuration."
RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again later."


class AIServiceUnavailableError(Exception):
    """No provider was configured when the gateway was constructed."""


class AIGatewayError(Exception):
    """A generation call failed.

    Attributes:
        kind: Classified failure kind from the provider adapter
        message: User-facing description
    """

    def __init__(self, kind: ProviderErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass
class GeneratedText:
    """Text produced by the provider and when it was produced."""

    text: str
    timestamp: datetime


@dataclass
class ConnectionTestResult:
    """Outcome of a live connectivity probe."""

    success: bool
    message: str
    test_response: str | None = None
    error: str | None = None


def build_chat_prompt(message: str, catalog_context: list[Dish] | None = None) -> str:
    """Compose the persona block, optional menu items, and the customer question."""
    prompt = SYSTEM_CONTEXT

    if catalog_context:
        prompt += "\n\nOur Current Menu Items:\n"
        for dish in catalog_context:
            prompt += f"- {dish.title}: {dish.description} ({dish.category.value})\n"

    prompt += f"\n\nCustomer Question: {message}"
    return prompt


def build_recommendation_prompt(preferences: str, dietary_restrictions: list[str]) -> str:
    restrictions = ", ".join(dietary_restrictions) if dietary_restrictions else "None"
    return RECOMMENDATION_TEMPLATE.format(preferences=preferences, restrictions=restrictions)


def build_cooking_tip_prompt(topic: str) -> str:
    return COOKING_TIP_TEMPLATE.format(topic=topic)


class AIGateway:
    """Stateless gateway to the text generation provider.

    Availability is fixed when the gateway is constructed: a gateway built
    without an adapter stays unavailable for its whole lifetime and never
    touches the network. Downstream failures do not change availability;
    every call fails or succeeds on its own.
    """

    def __init__(self, adapter: TextGenerationAdapter | None) -> None:
        """Initialize the gateway.

        Args:
            adapter: Provider adapter, or None when no credential is configured
        """
        self.adapter = adapter
        if adapter is None:
            logger.warning("AI provider not configured; chatbot endpoints will report unavailable")
        else:
            logger.info(f"AI gateway initialized with provider {adapter.provider_name}")

    @property
    def is_available(self) -> bool:
        return self.adapter is not None

    async def _generate(self, operation: str, prompt: str, fallback_message: str) -> GeneratedText:
        """Submit a prompt and translate provider failures into gateway errors.

        Args:
            operation: Metric label for the calling operation
            prompt: Composed prompt
            fallback_message: User-facing message for transient and unknown failures

        Raises:
            AIServiceUnavailableError: If no adapter is configured
            AIGatewayError: If the provider call fails
        """
        if self.adapter is None:
            raise AIServiceUnavailableError("AI service is not available. Please check your API key.")

        try:
            text = await self.adapter.generate(prompt)
        except ProviderError as e:
            logger.error(f"AI {operation} failed ({e.kind.value}): {e.detail}")
            record_ai_request(operation, success=False)
            record_ai_failure(e.kind.value)
            raise AIGatewayError(e.kind, self._user_message(e.kind, fallback_message)) from e

        record_ai_request(operation, success=True)
        return GeneratedText(text=text, timestamp=datetime.now(UTC))

    @staticmethod
    def _user_message(kind: ProviderErrorKind, fallback_message: str) -> str:
        if kind == ProviderErrorKind.CREDENTIAL_INVALID:
            return CREDENTIAL_INVALID_MESSAGE
        if kind == ProviderErrorKind.RATE_LIMITED:
            return RATE_LIMITED_MESSAGE
        return fallback_message

    @traced("ai_generate_response")
    async def generate_response(
        self, message: str, catalog_context: list[Dish] | None = None
    ) -> GeneratedText:
        """Answer a customer question, grounded in the catalog when provided.

        Args:
            message: Raw customer message
            catalog_context: Dishes to list in the prompt

        Returns:
            GeneratedText: The answer
        """
        prompt = build_chat_prompt(message, catalog_context)
        return await self._generate("chat", prompt, "Failed to generate response. Please try again.")

    @traced("ai_generate_food_recommendation")
    async def generate_food_recommendation(
        self, preferences: str, dietary_restrictions: list[str] | None = None
    ) -> GeneratedText:
        """Recommend dishes for the given preferences and restrictions."""
        prompt = build_recommendation_prompt(preferences, dietary_restrictions or [])
        return await self._generate(
            "recommendation", prompt, "Failed to generate food recommendations."
        )

    @traced("ai_generate_cooking_tip", arg_attributes={"ai.topic": "topic"})
    async def generate_cooking_tip(self, topic: str) -> GeneratedText:
        """Produce a cooking tip about a topic."""
        prompt = build_cooking_tip_prompt(topic)
        return await self._generate("cooking_tip", prompt, "Failed to generate cooking tip.")

    async def test_connection(self) -> ConnectionTestResult:
        """Probe the provider with a trivial prompt. Never raises.

        Returns:
            ConnectionTestResult: success flag, message, and the reply or error
        """
        if self.adapter is None:
            return ConnectionTestResult(success=False, message="AI service API key not configured")

        try:
            reply = await self.adapter.generate(CONNECTION_TEST_PROMPT)
        except ProviderError as e:
            return ConnectionTestResult(
                success=False,
                message="Failed to connect to AI service",
                error=e.detail,
            )

        return ConnectionTestResult(
            success=True,
            message="AI service connection successful",
            test_response=reply,
        )
