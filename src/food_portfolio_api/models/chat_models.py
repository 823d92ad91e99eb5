"""Request bodies for the chatbot endpoints."""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Chat message from the site widget."""

    message: str | None = None
    includeContext: bool = True  # noqa: N815


class RecommendationRequest(BaseModel):
    """Food recommendation request."""

    preferences: str | None = None
    dietaryRestrictions: list[str] = Field(default_factory=list)  # noqa: N815


class CookingTipRequest(BaseModel):
    """Cooking tip request."""

    topic: str | None = None
