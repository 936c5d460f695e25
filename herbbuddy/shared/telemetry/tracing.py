"""Span helpers for cache loads and background refreshes.

Spans carry key names and flags only; cached payloads are never recorded.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

T = TypeVar("T")

# Keyword arguments copied onto the span as arg.<name>.
_SPAN_ARG_KEYS = frozenset({"key", "keys", "entity", "namespace", "use_cache", "ttl_ms"})


def traced(
    operation_name: str | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Wrap a coroutine function in a span.

    The span is marked ERROR with the exception recorded when the call
    raises, OK otherwise. Background tasks created inside the call get
    the span as their parent through the copied context.

    Args:
        operation_name: Span name (defaults to module.funcname).
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with tracer.start_as_current_span(span_name) as span:
                for name, value in kwargs.items():
                    if name in _SPAN_ARG_KEYS:
                        span.set_attribute(f"arg.{name}", str(value))
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, attributes: dict[str, str] | None = None) -> None:
    """Record a cache event (hit, miss, refresh outcome) on the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes or {})
