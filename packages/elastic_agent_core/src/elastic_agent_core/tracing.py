from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def setup_tracing(service_name: str, enabled: bool = True):
    """Registers a global tracer provider exporting spans over OTLP.

    When tracing is disabled the no-op provider of the API stays in place, so
    spans started by the service cost nothing and are never exported.
    """
    if not enabled or getattr(setup_tracing, "has_run", False):
        return

    provider = TracerProvider(resource=Resource(attributes={SERVICE_NAME: service_name}))
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))

    trace.set_tracer_provider(provider)
    setup_tracing.has_run = True


def get_tracer(module_name: str):
    """Gets a tracer instance for a specific module."""
    return trace.get_tracer(module_name)
