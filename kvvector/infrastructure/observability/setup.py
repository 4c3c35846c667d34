"""OpenTelemetry setup and initialization."""

import logging

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBasedTraceIdRatio

from kvvector.infrastructure.observability.structlog_processor import add_trace_context

# Module-level state for cleanup
_tracer_provider: TracerProvider | None = None
_initialized: bool = False


def init_observability(
    service_name: str,
    service_version: str,
    *,
    otlp_endpoint: str | None = None,
    console_export: bool = False,
    enabled: bool = True,
    sample_rate: float = 1.0,
    log_level: int = logging.INFO,
) -> None:
    """Initialize OpenTelemetry tracing and configure structlog integration.

    Sets up the global tracer provider with the requested exporters and
    configures structlog to include trace context in every log event.
    Calling it again before shutdown_observability() is a no-op.

    Args:
        service_name: Name of the service for resource attribution.
        service_version: Version of the service.
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4318").
            If None and console_export is False, no exporter is configured.
        console_export: If True, export spans to console (for development).
        enabled: If False, tracing is completely disabled (no-op provider).
        sample_rate: Sampling rate between 0.0 and 1.0. Default is 1.0 (all traces).
        log_level: Level for the standard library root logger.
    """
    global _tracer_provider, _initialized

    if _initialized:
        return

    if not enabled:
        trace.set_tracer_provider(trace.NoOpTracerProvider())
        _configure_structlog(log_level)
        _initialized = True
        return

    resource = Resource.create(
        {
            SERVICE_NAME: service_name,
            SERVICE_VERSION: service_version,
        }
    )

    sampler = ParentBasedTraceIdRatio(sample_rate)
    _tracer_provider = TracerProvider(resource=resource, sampler=sampler)

    if console_export:
        _tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    if otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces")
        _tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(_tracer_provider)

    _configure_structlog(log_level)

    _initialized = True


def shutdown_observability() -> None:
    """Shutdown the tracer provider and flush any pending spans.

    Call this before the process exits so buffered spans are exported.
    """
    global _tracer_provider, _initialized

    if _tracer_provider is not None:
        _tracer_provider.shutdown()
        _tracer_provider = None

    _initialized = False


def _configure_structlog(log_level: int) -> None:
    """Configure structlog with OpenTelemetry trace context injection."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            add_trace_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
        )
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)
