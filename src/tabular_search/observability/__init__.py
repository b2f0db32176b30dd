"""Observability module for tracing, metrics, and structured logging."""

from tabular_search.observability.context import get_trace_context, set_trace_context, trace_context
from tabular_search.observability.logging import JsonFormatter, configure_logging, configure_logging_from_settings
from tabular_search.observability.metrics import (
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    SEARCH_RESULTS,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from tabular_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "SEARCH_LATENCY",
    "SEARCH_REQUESTS",
    "SEARCH_RESULTS",
    "JsonFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
