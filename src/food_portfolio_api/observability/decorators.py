"""OpenTelemetry tracing decorators."""

import asyncio
import functools
import inspect
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode

SERVICE_NAME = "food-portfolio-api"

F = TypeVar("F", bound=Callable[..., Any])


def _argument_attributes(
    signature: inspect.Signature,
    arg_attributes: Mapping[str, str],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, Any]:
    if not arg_attributes:
        return {}
    try:
        bound = signature.bind(*args, **kwargs)
    except TypeError:
        return {}
    bound.apply_defaults()

    attributes = {}
    for attribute, argument in arg_attributes.items():
        value = bound.arguments.get(argument)
        if isinstance(value, str | bool | int | float):
            attributes[attribute] = value
    return attributes


@contextmanager
def _traced_call(
    tracer: trace.Tracer, name: str, func_name: str, attributes: dict[str, Any]
) -> Iterator[Span]:
    with tracer.start_as_current_span(name, record_exception=False) as span:
        span.set_attribute("code.function", func_name)
        for key, value in attributes.items():
            span.set_attribute(key, value)

        try:
            yield span
        except Exception as e:
            span.set_attribute("success", False)
            span.set_attribute("error.type", type(e).__name__)
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
        span.set_attribute("success", True)


def traced(
    span_name: str | None = None,
    arg_attributes: Mapping[str, str] | None = None,
    service_name: str = SERVICE_NAME,
) -> Callable[[F], F]:
    """Decorator to run a function inside an OpenTelemetry span.

    Exceptions are recorded on the span and re-raised unchanged.

    Args:
        span_name: Name for the span (defaults to the function name)
        arg_attributes: Span attribute name to argument name; scalar argument
            values are copied onto the span
        service_name: Instrumentation scope for the tracer

    Example:
        @traced("store_select", arg_attributes={"db.table": "table"})
        async def select(self, table: str, ...) -> QueryResult[list[Row]]:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(service_name)
        signature = inspect.signature(func)
        mapping = dict(arg_attributes or {})

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            attributes = _argument_attributes(signature, mapping, args, kwargs)
            with _traced_call(tracer, name, func.__name__, attributes):
                return await func(*args, **kwargs)

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            attributes = _argument_attributes(signature, mapping, args, kwargs)
            with _traced_call(tracer, name, func.__name__, attributes):
                return func(*args, **kwargs)

        if asyncio.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator
