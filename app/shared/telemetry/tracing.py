"""Span decorator for engine operations.

Spans carry identifiers only (template, document, entity, status, actor).
Caller data, entity attributes and rendered content never reach a span.
"""

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from app.domain.exceptions import CrmException

P = ParamSpec("P")
T = TypeVar("T")

SPAN_ARGUMENTS = frozenset({
    "template_id",
    "template_ids",
    "document_id",
    "entity_type",
    "entity_id",
    "target_status",
    "actor_id",
    "recent_limit",
})


def _attribute_value(value: Any) -> str | int | float | bool:
    if isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(v) for v in value)
    return str(getattr(value, "value", value))


def span_arguments(
    signature: inspect.Signature, args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, str | int | float | bool]:
    """Return the allowlisted call arguments as span attributes (positional or keyword)."""
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return {}
    return {
        f"crm.{name}": _attribute_value(value)
        for name, value in bound.arguments.items()
        if name in SPAN_ARGUMENTS and value is not None
    }


def traced(
    operation_name: str | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Run an async operation inside a span named operation_name.

    Engine errors are tagged with their error_code; the exception always propagates.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"traced expects an async function, got {func.__qualname__}")
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            tracer = trace.get_tracer(func.__module__)
            with tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                if span.is_recording():
                    span.set_attributes(span_arguments(signature, args, kwargs))
                try:
                    result = await func(*args, **kwargs)
                except CrmException as e:
                    span.set_attribute("crm.error_code", e.error_code)
                    span.set_status(Status(StatusCode.ERROR, e.message))
                    raise
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Attach results (new ids, counters) to the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes({f"crm.{key}": value for key, value in attributes.items()})
