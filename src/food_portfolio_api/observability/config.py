"""OpenTelemetry configuration and structured logging setup."""

import logging
import os
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from pythonjsonlogger import jsonlogger

from food_portfolio_api.observability.decorators import SERVICE_NAME

logger = logging.getLogger(__name__)

DEFAULT_OTLP_ENDPOINT = "http://localhost:4318"
DEFAULT_METRIC_EXPORT_INTERVAL_MS = 60000

# Loggers that are chatty at INFO; kept at WARNING unless LOG_LEVEL is DEBUG.
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _otlp_endpoint(signal: str) -> str:
    base = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", DEFAULT_OTLP_ENDPOINT).rstrip("/")
    return f"{base}/v1/{signal}"


def get_service_resource() -> Resource:
    """Create the resource identifying this API and its deployment environment."""
    return Resource.create(
        {
            "service.name": os.getenv("OTEL_SERVICE_NAME", SERVICE_NAME),
            "deployment.environment": os.getenv("ENVIRONMENT", "development"),
        }
    )


def setup_tracing(resource: Resource) -> None:
    endpoint = _otlp_endpoint("traces")
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(provider)

    logger.info(f"OpenTelemetry tracing configured with endpoint: {endpoint}")


def setup_metrics(resource: Resource) -> None:
    endpoint = _otlp_endpoint("metrics")
    interval = int(
        os.getenv("OTEL_METRIC_EXPORT_INTERVAL", str(DEFAULT_METRIC_EXPORT_INTERVAL_MS))
    )
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=endpoint), export_interval_millis=interval
    )
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[reader]))

    logger.info(f"OpenTelemetry metrics configured with endpoint: {endpoint} every {interval}ms")


def setup_observability(app: Any = None, enable_exporters: bool = True) -> None:
    """Initialize OpenTelemetry with tracing, metrics, and auto-instrumentation.

    Both outbound services (database REST API and the LLM API) are reached
    over httpx, so instrumenting httpx covers every external call.

    Args:
        app: Optional FastAPI application to instrument
        enable_exporters: Whether to enable OTLP exporters (forced off when ENVIRONMENT=test)
    """
    if os.getenv("ENVIRONMENT", "development") == "test":
        enable_exporters = False

    resource = get_service_resource()

    if enable_exporters:
        setup_tracing(resource)
        setup_metrics(resource)
    else:
        trace.set_tracer_provider(TracerProvider(resource=resource))
        metrics.set_meter_provider(MeterProvider(resource=resource))

    HTTPXClientInstrumentor().instrument()

    if app is not None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls="api/health")

    logger.info("OpenTelemetry observability configured")


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger.

    LOG_LEVEL in the environment overrides the argument.
    """
    level_str = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={"levelname": "level", "name": "logger"},
        timestamp=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.info(f"Structured JSON logging configured at {level_str} level")
