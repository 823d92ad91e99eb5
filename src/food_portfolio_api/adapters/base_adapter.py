"""Base adapter for text generation providers.

This module defines the abstract base class that all provider adapters must
implement, and the closed set of failure kinds they report.
"""

from abc import ABC, abstractmethod
from enum import Enum


class ProviderErrorKind(str, Enum):
    """Enumeration of provider failure kinds."""

    CREDENTIAL_INVALID = "credential_invalid"
    RATE_LIMITED = "rate_limited"
    TRANSIENT = "transient"
    UNKNOWN = "unknown"


class ProviderError(Exception):
    """A provider call failed.

    Attributes:
        kind: Classified failure kind
        detail: Raw provider message, for logs only
    """

    def __init__(self, kind: ProviderErrorKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail


class TextGenerationAdapter(ABC):
    """Abstract base class for text generation provider adapters.

    Adapters own everything specific to one provider: request format,
    authentication, response parsing, and classifying failures into
    ``ProviderErrorKind``. Prompt composition belongs to the gateway.
    """

    def __init__(self, provider_name: str) -> None:
        """Initialize the provider adapter.

        Args:
            provider_name: Name of the provider (e.g., 'gemini')
        """
        self.provider_name = provider_name

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Submit a single-turn prompt and return the generated text.

        Args:
            prompt: Fully composed prompt

        Returns:
            str: Generated text

        Raises:
            ProviderError: On any failure, with the failure kind classified
        """
        pass
