"""OpenTelemetry instrumentation and observability utilities."""

from food_portfolio_api.observability.config import configure_logging, setup_observability
from food_portfolio_api.observability.decorators import SERVICE_NAME, traced

__all__ = ["SERVICE_NAME", "setup_observability", "configure_logging", "traced"]
