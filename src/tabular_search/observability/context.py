"""Context propagation for trace correlation across threads and tasks."""

from __future__ import annotations

from contextvars import ContextVar
from uuid import uuid4

from opentelemetry import trace


trace_context: ContextVar[dict | None] = ContextVar("trace_context", default=None)


def generate_trace_id() -> str:
    """Generate a 32-char hex trace ID."""
    return uuid4().hex


def generate_span_id() -> str:
    """Generate a 16-char hex span ID."""
    return uuid4().hex[:16]


def get_trace_context() -> dict:
    """Get current trace context with trace_id and span_id.

    A recording OpenTelemetry span wins over the context variable so log lines
    emitted inside ``create_span`` carry the span's real identifiers.
    """
    span_ctx = trace.get_current_span().get_span_context()
    if span_ctx.is_valid:
        ctx = dict(trace_context.get() or {})
        ctx.update(
            trace_id=format(span_ctx.trace_id, "032x"),
            span_id=format(span_ctx.span_id, "016x"),
        )
        return ctx

    ctx = trace_context.get()
    if ctx is None or not ctx.get("trace_id"):
        ctx = {"trace_id": generate_trace_id(), "span_id": generate_span_id()}
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **extra: object) -> None:
    """Set trace context for the current thread or task."""
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})
