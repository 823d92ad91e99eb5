"""Google Gemini adapter implementation.

This adapter submits prompts to the Gemini ``generateContent`` REST endpoint
and translates provider failures into ``ProviderErrorKind`` values.
"""

import logging
from typing import Any

import httpx

from food_portfolio_api.adapters.base_adapter import (
    ProviderError,
    ProviderErrorKind,
    TextGenerationAdapter,
)

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-1.5-flash"

_CREDENTIAL_MARKERS = ("api_key_invalid", "api key not valid", "permission_denied")
_RATE_LIMIT_MARKERS = ("rate_limit_exceeded", "resource_exhausted", "quota")


def classify_provider_error(status_code: int | None, message: str) -> ProviderErrorKind:
    """Map a Gemini failure onto a provider error kind.

    This is the only place provider error text is inspected.

    Args:
        status_code: HTTP status of the failed call, None for transport failures
        message: Error message or status text from the provider

    Returns:
        ProviderErrorKind: The classified kind
    """
    lowered = message.lower()
    if any(marker in lowered for marker in _CREDENTIAL_MARKERS) or status_code in (401, 403):
        return ProviderErrorKind.CREDENTIAL_INVALID
    if any(marker in lowered for marker in _RATE_LIMIT_MARKERS) or status_code == 429:
        return ProviderErrorKind.RATE_LIMITED
    if status_code is None or status_code >= 500:
        return ProviderErrorKind.TRANSIENT
    return ProviderErrorKind.UNKNOWN


def _error_text(response: httpx.Response) -> str:
    """Pull ``error.status`` and ``error.message`` out of a Gemini error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text

    error = body.get("error", {}) if isinstance(body, dict) else {}
    details = " ".join(
        str(detail.get("reason", "")) for detail in error.get("details", []) if isinstance(detail, dict)
    )
    return " ".join(part for part in (error.get("status"), error.get("message"), details) if part)


class GeminiAdapter(TextGenerationAdapter):
    """Adapter for the Gemini generative language API.

    Authenticates with an API key sent in the ``x-goog-api-key`` header.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout_seconds: float = 60.0,
        base_url: str = GEMINI_BASE_URL,
    ) -> None:
        """Initialize Gemini adapter.

        Args:
            api_key: Gemini API key
            model: Model name (e.g., 'gemini-1.5-flash')
            timeout_seconds: Request timeout for a single generation call
            base_url: API base URL
        """
        super().__init__("gemini")
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.base_url = base_url.rstrip("/")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_payload(self, prompt: str) -> dict[str, Any]:
        """Wrap a prompt as a single user turn."""
        return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

    @staticmethod
    def extract_text(body: Any) -> str:
        """Join the text parts of the first candidate.

        Raises:
            ProviderError: If the response carries no text (e.g., the prompt was blocked)
                or is not shaped like a generateContent reply
        """
        if not isinstance(body, dict):
            raise ProviderError(ProviderErrorKind.UNKNOWN, "Unexpected response shape")

        candidates = body.get("candidates") or []
        if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
            parts = (candidates[0].get("content") or {}).get("parts") or []
            text = "".join(part.get("text") or "" for part in parts if isinstance(part, dict))
            if text:
                return text

        block_reason = (body.get("promptFeedback") or {}).get("blockReason")
        detail = f"Response blocked: {block_reason}" if block_reason else "Response contained no text"
        raise ProviderError(ProviderErrorKind.UNKNOWN, detail)

    async def generate(self, prompt: str) -> str:
        """Submit a prompt to Gemini.

        Args:
            prompt: Fully composed prompt

        Returns:
            str: Generated text

        Raises:
            ProviderError: On HTTP, transport, or response format failures
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(
                    self.endpoint,
                    json=self.build_payload(prompt),
                    headers={"x-goog-api-key": self.api_key},
                )
                response.raise_for_status()
                body = response.json()

        except httpx.HTTPStatusError as e:
            detail = _error_text(e.response)
            kind = classify_provider_error(e.response.status_code, detail)
            logger.error(f"Gemini request failed ({e.response.status_code}, {kind.value}): {detail}")
            raise ProviderError(kind, detail) from e
        except httpx.RequestError as e:
            logger.error(f"Gemini request could not be sent: {e}")
            raise ProviderError(classify_provider_error(None, str(e)), str(e)) from e
        except ValueError as e:
            raise ProviderError(ProviderErrorKind.UNKNOWN, f"Invalid response body: {e}") from e

        return self.extract_text(body)
