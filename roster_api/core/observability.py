from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from .config import settings

tracer = trace.get_tracer("roster_api")
meter = metrics.get_meter("roster_api")

mutation_counter = meter.create_counter(
    "roster.mutations", unit="1", description="Rows inserted, updated or deleted per table"
)
view_rows_histogram = meter.create_histogram(
    "roster.view.rows", unit="1", description="Rows matching a server-side view request"
)


def configure_observability(otlp_endpoint: str | None = None) -> bool:
    """Install tracer and meter providers; export over OTLP when an endpoint is known.

    Returns whether an exporter was attached.
    """
    endpoint = otlp_endpoint or settings.otlp_endpoint
    resource = Resource.create({"service.name": "roster-api", "deployment.environment": settings.env})

    tracer_provider = TracerProvider(resource=resource)
    readers = []
    if endpoint:
        tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces")))
        readers.append(PeriodicExportingMetricReader(OTLPMetricExporter(endpoint=f"{endpoint}/v1/metrics")))

    trace.set_tracer_provider(tracer_provider)
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=readers))
    return bool(endpoint)
