"""
Logging and tracing for the gateway.

Spans are always recorded in-process; they are shipped over OTLP/HTTP only
when ``otel_exporter_otlp_endpoint`` is configured. Log lines carry the
current trace id so a validation or webhook can be followed across both.
"""

from typing import Any, Dict, Optional
import functools
import asyncio
import logging
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

from stripekit.common.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [trace=%(trace_id)s] %(message)s"


class TraceContextFilter(logging.Filter):
    """Stamps each record with the id of the span it was logged under."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = trace.get_current_span().get_span_context()
        record.trace_id = (
            format(context.trace_id, "032x") if context.is_valid else "-"
        )
        return True


_initialized = False
_tracer: Optional[trace.Tracer] = None


def _initialize_telemetry():
    """Install the tracer provider and the log format, once per process."""
    global _initialized, _tracer

    if _initialized:
        return

    resource = Resource(attributes={SERVICE_NAME: settings.otel_service_name})
    provider = TracerProvider(resource=resource)

    if settings.otel_exporter_otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(
                    endpoint=settings.otel_exporter_otlp_endpoint,
                    headers=settings.otel_exporter_otlp_headers,
                )
            )
        )

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(settings.otel_service_name)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(TraceContextFilter())

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance. Ensures telemetry is initialized.
    Use this instead of logging.getLogger() directly.
    """
    _initialize_telemetry()
    return logging.getLogger(name)


def trace_span(func=None, *, name: Optional[str] = None):
    """
    Run the decorated function inside a span.

    The span is named ``Class.method`` for methods and after the function
    otherwise, unless ``name`` is given. Usable bare or as ``@trace_span(name=...)``.
    """
    if func is None:
        return functools.partial(trace_span, name=name)

    def _span_name(args) -> str:
        if name:
            return name
        if args and hasattr(args[0], func.__name__):
            return f"{args[0].__class__.__name__}.{func.__name__}"
        return func.__name__

    if asyncio.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            _initialize_telemetry()
            with _tracer.start_as_current_span(_span_name(args)):
                return await func(*args, **kwargs)

        return async_wrapper

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        _initialize_telemetry()
        with _tracer.start_as_current_span(_span_name(args)):
            return func(*args, **kwargs)

    return sync_wrapper


def set_span_attributes(**attributes: Any) -> None:
    """Attach attributes (customer id, event id, ...) to the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(
            {key: value for key, value in attributes.items() if value is not None}
        )


def log_span_event(message: str, attributes: Optional[Dict[str, str]] = None):
    """
    Record a message as an event on the current span and log it as well.
    """
    current_span = trace.get_current_span()
    if current_span.is_recording():
        current_span.add_event(message, attributes=attributes or {})

    get_logger(__name__).info(message, extra=attributes)
