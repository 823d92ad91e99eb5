"""Custom metrics for the food portfolio API."""

from opentelemetry import metrics

from food_portfolio_api.observability.decorators import SERVICE_NAME

meter = metrics.get_meter(SERVICE_NAME)

# Database REST API round-trip time
store_request_duration = meter.create_histogram(
    name="store_request_duration_seconds",
    description="Duration of database requests by table and operation",
    unit="s",
)

ai_request_counter = meter.create_counter(
    name="ai_request_total",
    description="Total number of text generation requests by operation",
    unit="1",
)

ai_failure_counter = meter.create_counter(
    name="ai_failure_total",
    description="Total number of failed text generation requests by error kind",
    unit="1",
)


def record_store_request(table: str, operation: str, duration_seconds: float, success: bool) -> None:
    """Record a database request.

    Args:
        table: Table the request targeted (e.g., "dishes")
        operation: The operation performed (e.g., "select", "update")
        duration_seconds: Duration in seconds
        success: Whether the request succeeded
    """
    store_request_duration.record(
        duration_seconds, {"table": table, "operation": operation, "success": success}
    )


def record_ai_request(operation: str, success: bool) -> None:
    """Record a text generation request.

    Args:
        operation: Gateway operation (e.g., "chat", "recommendation")
        success: Whether a response was generated
    """
    ai_request_counter.add(1, {"operation": operation, "success": success})


def record_ai_failure(kind: str) -> None:
    """Record a failed text generation request.

    Args:
        kind: Classified provider error kind
    """
    ai_failure_counter.add(1, {"kind": kind})
