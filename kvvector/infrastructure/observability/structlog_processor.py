"""Structlog processor for OpenTelemetry trace context injection."""

from typing import Any

from kvvector.infrastructure.observability.tracing import get_current_span_id, get_current_trace_id


def add_trace_context(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor that adds trace_id and span_id to log events.

    Lets store log lines (index mutations, skipped documents) be correlated
    with the span of the operation that emitted them.

    Args:
        logger: The logger instance (unused, required by structlog API).
        method_name: The log method name (unused, required by structlog API).
        event_dict: The log event dictionary to enrich.

    Returns:
        The enriched event dictionary with trace_id and span_id if available.
    """
    trace_id = get_current_trace_id()
    if trace_id is not None:
        event_dict["trace_id"] = trace_id
        event_dict["span_id"] = get_current_span_id()

    return event_dict
